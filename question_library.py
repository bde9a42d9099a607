# services/tracker/question_library.py
"""
Deterministic question library.

Builds a reproducible pool of multiple-choice questions for a user's topic
without calling any external service, then picks a reproducible subset.
Same inputs always give the same questions, in the same order, with the
same option order.
"""

from __future__ import annotations

from typing import Iterator, List, Optional, Sequence, Tuple, TypeVar

from pydantic import BaseModel

T = TypeVar("T")

_MASK32 = 0xFFFFFFFF
_FNV_OFFSET = 2166136261
_FNV_PRIME = 16777619
_STREAM_STEP = 0x6D2B79F5
_TWO_32 = 4294967296

TEMPLATES_PER_SUBTOPIC = 20

CONTEXTS: Tuple[str, ...] = (
    "a startup team",
    "a learning sprint",
    "a hackathon",
    "a product launch",
    "a study group",
    "a freelance project",
    "an interview prep track",
    "a mentorship session",
)


class QuestionTemplate(BaseModel):
    prompt: str
    correct_answer: str
    distractors: Tuple[str, str, str]


class GeneratedQuestion(BaseModel):
    prompt: str
    options: List[str]
    correct_answer: str
    explanation: Optional[str] = None


# (prompt, correct, distractors). Placeholders: {subtopic}, {context}.
# Every prompt gets " (Case {case_code})" appended.
_CATALOGUE: Tuple[Tuple[str, str, Tuple[str, str, str]], ...] = (
    (
        'What is the primary goal of "{subtopic}" in {context}?',
        "Apply {subtopic} to solve its core task efficiently.",
        (
            "Avoid using {subtopic} entirely.",
            "Use {subtopic} only for visual design.",
            "Use {subtopic} only for database backups.",
        ),
    ),
    (
        'Which practice improves mastery of "{subtopic}"?',
        "Work through progressively harder problems and review mistakes.",
        (
            "Memorize solutions without understanding.",
            "Skip problem-solving and only read summaries.",
            "Avoid revisiting errors.",
        ),
    ),
    (
        'In {context}, what is a common pitfall when learning "{subtopic}"?',
        "Rushing through concepts without validating understanding.",
        (
            "Using too many color themes.",
            "Adding more hardware.",
            "Ignoring basic math entirely.",
        ),
    ),
    (
        'Which outcome best shows understanding of "{subtopic}"?',
        "You can explain {subtopic} and apply it to new problems.",
        (
            "You can recall a definition but not apply it.",
            "You only solved one example once.",
            "You avoid questions involving edge cases.",
        ),
    ),
    (
        'When should you use "{subtopic}"?',
        "When it offers the most direct or efficient approach for the task.",
        (
            "Only when the problem is already solved.",
            "Only if the solution is provided.",
            "Only for UI animations.",
        ),
    ),
    (
        'Which step helps verify your "{subtopic}" solution?',
        "Test with edge cases and explain the logic step-by-step.",
        (
            "Remove comments and skip tests.",
            "Assume it works for all inputs.",
            "Only test the happy path.",
        ),
    ),
    (
        'What is a good way to decompose "{subtopic}" problems?',
        "Break the task into smaller, solvable steps.",
        (
            "Jump directly to optimization before correctness.",
            "Avoid writing down assumptions.",
            "Ignore input constraints.",
        ),
    ),
    (
        'Which signal suggests you should revisit "{subtopic}" fundamentals?',
        "You struggle to explain why your approach works.",
        (
            "You can recite a definition without examples.",
            "You only use pre-written solutions.",
            "You avoid discussing time tradeoffs.",
        ),
    ),
    (
        'What helps retain "{subtopic}" knowledge over time?',
        "Spaced repetition with small practice sets.",
        (
            "One long cram session only.",
            "Avoiding real problems.",
            "Never reviewing solved work.",
        ),
    ),
    (
        'Which is the best next step after learning "{subtopic}" basics?',
        "Solve applied problems that require adapting the core idea.",
        (
            "Stop practicing and move on immediately.",
            "Only watch more videos.",
            "Skip exercises entirely.",
        ),
    ),
    (
        'How do you measure progress in "{subtopic}"?',
        "By solving increasingly varied problems without hints.",
        (
            "By the number of pages read.",
            "By the number of videos watched.",
            "By how fast you skim notes.",
        ),
    ),
    (
        'Which approach improves accuracy with "{subtopic}"?',
        "Slow down to verify assumptions before coding.",
        (
            "Skip planning and code immediately.",
            "Copy solutions without reading.",
            "Never check constraints.",
        ),
    ),
    (
        'What is a reliable way to debug "{subtopic}" solutions?',
        "Trace with small inputs and check each step.",
        (
            "Guess until it passes.",
            "Only run on large inputs.",
            "Remove validation logic.",
        ),
    ),
    (
        'Which statement best reflects good "{subtopic}" hygiene?',
        "Document assumptions and handle edge cases.",
        (
            "Ignore edge cases to save time.",
            "Focus only on speed and skip correctness.",
            "Avoid naming variables clearly.",
        ),
    ),
    (
        'How should you prioritize practice for "{subtopic}"?',
        "Start with fundamentals, then increase difficulty.",
        (
            "Start with the hardest problems.",
            "Only review solutions.",
            "Skip the fundamentals entirely.",
        ),
    ),
    (
        'Which behavior slows improvement in "{subtopic}"?',
        "Repeating the same easy problem without variation.",
        (
            "Reviewing mistakes.",
            "Trying different approaches.",
            "Explaining solutions aloud.",
        ),
    ),
    (
        'In {context}, what is the best way to explain "{subtopic}" to a peer?',
        "Describe the idea, a simple example, and why it works.",
        (
            "List only final answers.",
            "Skip the reasoning.",
            "Avoid any example.",
        ),
    ),
    (
        "Which signal shows you're ready to advance beyond \"{subtopic}\" basics?",
        "You can solve variations without external hints.",
        (
            "You can repeat a definition.",
            "You only solve guided examples.",
            "You avoid new problems.",
        ),
    ),
    (
        'What is the role of constraints when working with "{subtopic}"?',
        "They shape the right approach and complexity choices.",
        (
            "They are optional details.",
            "They only matter after coding.",
            "They should be ignored for speed.",
        ),
    ),
    (
        'Which habit keeps "{subtopic}" skills sharp?',
        "Frequent short practice sessions with feedback.",
        (
            "Long breaks between practice.",
            "Only reading theory.",
            "Avoiding any review.",
        ),
    ),
)


# --- Seeding & pseudo-randomness --------------------------------------------------


def derive_seed(key: str) -> int:
    """FNV-1a (32-bit) over the code points of `key`."""
    h = _FNV_OFFSET
    for ch in key:
        h ^= ord(ch)
        h = (h * _FNV_PRIME) & _MASK32
    return h


def random_stream(seed: int) -> Iterator[float]:
    """
    Endless Mulberry32 sequence of floats in [0, 1).
    Each call starts over from `seed`.
    """
    t = seed & _MASK32
    while True:
        t = (t + _STREAM_STEP) & _MASK32
        r = ((t ^ (t >> 15)) * (t | 1)) & _MASK32
        r ^= (r + (((r ^ (r >> 7)) * (r | 61)) & _MASK32)) & _MASK32
        yield ((r ^ (r >> 14)) & _MASK32) / _TWO_32


def shuffle(items: Sequence[T], seed: int) -> List[T]:
    rng = random_stream(seed)
    out = list(items)
    for i in range(len(out) - 1, 0, -1):
        j = int(next(rng) * (i + 1))
        out[i], out[j] = out[j], out[i]
    return out


def select_context(seed: int) -> str:
    return CONTEXTS[seed % len(CONTEXTS)]


def case_code(seed: int) -> str:
    return format(seed & _MASK32, "x")[:6].rjust(6, "0")


# --- Library construction ---------------------------------------------------------


def build_templates(subtopic: str, code: str, context: str) -> List[QuestionTemplate]:
    templates: List[QuestionTemplate] = []
    for prompt, correct, distractors in _CATALOGUE:
        fill = {"subtopic": subtopic, "context": context}
        templates.append(
            QuestionTemplate(
                prompt=f"{prompt.format(**fill)} (Case {code})",
                correct_answer=correct.format(**fill),
                distractors=tuple(d.format(**fill) for d in distractors),
            )
        )
    return templates


def build_question_library(
    subtopic_titles: Sequence[str], user_id: str, topic_title: str
) -> List[GeneratedQuestion]:
    """
    One full template set per subtopic, in subtopic order then template order.
    With no subtopics the topic title itself is used as the only subtopic.
    """
    subtopics = list(subtopic_titles) or [topic_title]
    library: List[GeneratedQuestion] = []

    for index, subtopic in enumerate(subtopics):
        case_seed = derive_seed(f"{user_id}:{topic_title}:{subtopic}:{index}")
        templates = build_templates(subtopic, case_code(case_seed), select_context(case_seed))

        # Option order is keyed by template position only; the subtopic title
        # is what tells two subtopics apart.
        for template_index, template in enumerate(templates):
            seed = derive_seed(f"{user_id}:{topic_title}:{subtopic}:{template_index}")
            options = shuffle([template.correct_answer, *template.distractors], seed)
            library.append(
                GeneratedQuestion(
                    prompt=template.prompt,
                    options=options,
                    correct_answer=template.correct_answer,
                    explanation=None,
                )
            )

    return library


def select_questions(
    library: Sequence[GeneratedQuestion],
    user_id: str,
    topic_id: str,
    subtopic_id: Optional[str],
    desired_count: int,
) -> List[GeneratedQuestion]:
    scope = "topic" if subtopic_id is None else subtopic_id
    pick_seed = derive_seed(f"{user_id}:{topic_id}:{scope}:questions")
    return shuffle(library, pick_seed)[: max(0, desired_count)]


def question_count(completed_subtopics: int, single_subtopic: bool) -> int:
    """How many questions a generated test should hold."""
    if single_subtopic:
        return TEMPLATES_PER_SUBTOPIC
    return max(TEMPLATES_PER_SUBTOPIC, max(1, completed_subtopics) * 5)
