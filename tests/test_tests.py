from fastapi.testclient import TestClient

from db import SessionLocal
from main import app
from models import TestQuestion
from question_library import build_question_library, select_questions

client = TestClient(app)


def _topic(headers, title="DSA", **extra):
    r = client.post("/topics", json={"title": title, **extra}, headers=headers)
    assert r.status_code == 201, r.text
    topic_id = r.json()["topicId"]
    detail = client.get(f"/topics/{topic_id}", headers=headers).json()
    return topic_id, detail["subtopics"]


def _generate(headers, **body):
    return client.post("/tests/generate", json=body, headers=headers)


def _correct_answers(test_id):
    with SessionLocal() as db:
        rows = db.query(TestQuestion).filter(TestQuestion.test_id == test_id).all()
        return {q.id: q.correct_answer for q in rows}


def test_generate_for_whole_topic(headers):
    topic_id, _ = _topic(headers)
    r = _generate(headers, topicId=topic_id)
    assert r.status_code == 200, r.text
    body = r.json()
    assert isinstance(body["testId"], str)
    assert len(body["questions"]) == 20
    q = body["questions"][0]
    assert set(q) == {"id", "prompt", "options"}
    assert len(q["options"]) == 4


def test_generated_questions_match_local_library(headers):
    topic_id, subtopics = _topic(headers)
    body = _generate(headers, topicId=topic_id).json()

    library = build_question_library([s["title"] for s in subtopics], headers["x-user-id"], "DSA")
    expected = select_questions(library, headers["x-user-id"], topic_id, None, 20)
    assert [q["prompt"] for q in body["questions"]] == [q.prompt for q in expected]
    assert [q["options"] for q in body["questions"]] == [q.options for q in expected]


def test_count_grows_with_completed_subtopics(headers):
    topic_id, subtopics = _topic(
        headers,
        title="Custom",
        subtopics=[{"title": f"Part {i}"} for i in range(6)],
    )
    for s in subtopics:
        client.patch(
            f"/topics/{topic_id}/subtopics/{s['id']}", json={"status": "completed"}, headers=headers
        )
    body = _generate(headers, topicId=topic_id).json()
    assert len(body["questions"]) == 30


def test_generate_for_single_subtopic(headers):
    topic_id, subtopics = _topic(headers)
    target = subtopics[3]
    body = _generate(headers, topicId=topic_id, subtopicId=target["id"]).json()
    assert len(body["questions"]) == 20
    assert all(f'"{target["title"]}"' in q["prompt"] for q in body["questions"])


def test_generate_unknown_subtopic(headers):
    topic_id, _ = _topic(headers)
    r = _generate(headers, topicId=topic_id, subtopicId="missing")
    assert r.status_code == 404
    assert r.json()["detail"] == "Subtopic not found"


def test_generate_unknown_topic(headers):
    r = _generate(headers, topicId="missing")
    assert r.status_code == 404
    assert r.json()["detail"] == "Topic not found"


def test_offered_test_is_returned_unchanged(headers):
    topic_id, _ = _topic(headers)
    first = _generate(headers, topicId=topic_id).json()
    again = _generate(headers, topicId=topic_id).json()
    assert again["testId"] == first["testId"]
    assert [q["id"] for q in again["questions"]] == [q["id"] for q in first["questions"]]


def test_submit_scores_and_locks(headers):
    topic_id, _ = _topic(headers)
    test = _generate(headers, topicId=topic_id).json()
    answers_by_id = _correct_answers(test["testId"])

    answers = []
    for i, q in enumerate(test["questions"]):
        if i < 15:
            # grading ignores case and surrounding whitespace
            answers.append({"questionId": q["id"], "answer": f"  {answers_by_id[q['id']].upper()} "})
        elif i < 18:
            wrong = next(o for o in q["options"] if o != answers_by_id[q["id"]])
            answers.append({"questionId": q["id"], "answer": wrong})
        # the rest stay unanswered

    r = client.post(f"/tests/{test['testId']}/submit", json={"answers": answers}, headers=headers)
    assert r.status_code == 200, r.text
    assert r.json() == {"score": 15, "maxScore": 20}

    again = client.post(f"/tests/{test['testId']}/submit", json={"answers": []}, headers=headers)
    assert again.status_code == 409
    assert again.json()["detail"] == "This test was already submitted."

    blocked = _generate(headers, topicId=topic_id)
    assert blocked.status_code == 409
    assert blocked.json()["detail"] == "Test already attempted for this topic."


def test_review_after_submit(headers):
    topic_id, _ = _topic(headers)
    test = _generate(headers, topicId=topic_id).json()

    before = client.get(f"/tests/{test['testId']}", headers=headers).json()
    assert before["status"] == "offered"
    assert before["questions"][0]["correctAnswer"] is None

    client.post(f"/tests/{test['testId']}/submit", json={"answers": []}, headers=headers)
    after = client.get(f"/tests/{test['testId']}", headers=headers).json()
    assert after["status"] == "attempted"
    assert after["score"] == 0 and after["maxScore"] == 20
    assert after["attemptedAt"] is not None
    q = after["questions"][0]
    assert q["correctAnswer"] in q["options"]
    assert q["userAnswer"] == ""
    assert q["isCorrect"] is False


def test_force_new_regenerates_attempted_test(headers):
    topic_id, subtopics = _topic(headers)
    test = _generate(headers, topicId=topic_id).json()
    client.post(f"/tests/{test['testId']}/submit", json={"answers": []}, headers=headers)

    r = _generate(headers, topicId=topic_id, subtopicId=subtopics[0]["id"], forceNew=True)
    assert r.status_code == 200
    fresh = r.json()
    assert fresh["testId"] == test["testId"]
    assert len(fresh["questions"]) == 20

    detail = client.get(f"/tests/{fresh['testId']}", headers=headers).json()
    assert detail["status"] == "offered"
    assert detail["score"] is None and detail["attemptedAt"] is None
    assert detail["totalQuestions"] == 20


def test_skip_blocks_generation_and_submission(headers):
    topic_id, _ = _topic(headers)
    test = _generate(headers, topicId=topic_id).json()

    r = client.post("/tests/skip", json={"topicId": topic_id}, headers=headers)
    assert r.status_code == 200 and r.json() == {"ok": True}

    blocked = _generate(headers, topicId=topic_id)
    assert blocked.status_code == 409
    assert blocked.json()["detail"] == "Test was skipped for this topic."

    sub = client.post(f"/tests/{test['testId']}/submit", json={"answers": []}, headers=headers)
    assert sub.status_code == 409

    detail = client.get(f"/topics/{topic_id}", headers=headers).json()
    assert detail["testStatus"] == "skipped"


def test_skip_without_existing_test(headers):
    topic_id, _ = _topic(headers)
    assert client.post("/tests/skip", json={"topicId": topic_id}, headers=headers).status_code == 200
    assert _generate(headers, topicId=topic_id, forceNew=True).status_code == 200


def test_tests_are_private(headers):
    topic_id, _ = _topic(headers)
    test = _generate(headers, topicId=topic_id).json()
    other = {**headers, "x-user-id": headers["x-user-id"] + "-other"}
    assert client.get(f"/tests/{test['testId']}", headers=other).status_code == 404
    r = client.post(f"/tests/{test['testId']}/submit", json={"answers": []}, headers=other)
    assert r.status_code == 404
    assert _generate(other, topicId=topic_id).status_code == 404


def test_skip_after_submit_clears_score(headers):
    topic_id, _ = _topic(headers)
    test = _generate(headers, topicId=topic_id).json()
    client.post(f"/tests/{test['testId']}/submit", json={"answers": []}, headers=headers)

    assert client.post("/tests/skip", json={"topicId": topic_id}, headers=headers).status_code == 200

    detail = client.get(f"/tests/{test['testId']}", headers=headers).json()
    assert detail["status"] == "skipped"
    assert detail["totalQuestions"] == 0
    assert detail["score"] is None
    assert detail["maxScore"] is None
    assert detail["attemptedAt"] is None
    assert detail["questions"] == []
