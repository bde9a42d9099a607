# Predefined learning plans for common topics.
# Matched by keyword; anything else needs subtopics from the caller.

from __future__ import annotations

from typing import Any, Dict, List, Optional

PLANS: Dict[str, Dict[str, List[Dict[str, Any]]]] = {
    "dsa": {
        "subtopics": [
            {
                "title": "Arrays and Strings",
                "description": "Master indexing, traversal, and two-pointer techniques.",
            },
            {
                "title": "Linked Lists and Stacks",
                "description": "Implement common operations and analyze time complexity.",
            },
            {
                "title": "Trees and BST",
                "description": "Practice traversals and recursive problem solving.",
            },
            {"title": "Graphs", "description": "Learn BFS, DFS, and shortest-path basics."},
            {
                "title": "Dynamic Programming",
                "description": "Use state transition and memoization patterns.",
            },
        ],
        "resources": [
            {"title": "NeetCode DSA Roadmap", "url": "https://neetcode.io/roadmap", "type": "web"},
            {
                "title": "Abdul Bari Data Structures Playlist",
                "url": "https://www.youtube.com/results?search_query=abdul+bari+data+structures",
                "type": "youtube",
            },
            {"title": "LeetCode Practice", "url": "https://leetcode.com/problemset/", "type": "web"},
        ],
    },
    "react": {
        "subtopics": [
            {
                "title": "Components and JSX",
                "description": "Build reusable UI units and understand render flow.",
            },
            {
                "title": "State and Props",
                "description": "Model data flow and component communication.",
            },
            {
                "title": "Hooks",
                "description": "Use useState, useEffect, and custom hooks correctly.",
            },
            {
                "title": "Routing and Forms",
                "description": "Manage navigation and controlled forms.",
            },
            {
                "title": "Performance and Patterns",
                "description": "Apply memoization, splitting, and clean architecture.",
            },
        ],
        "resources": [
            {"title": "React Official Docs", "url": "https://react.dev", "type": "web"},
            {
                "title": "React Full Course",
                "url": "https://www.youtube.com/results?search_query=react+full+course",
                "type": "youtube",
            },
            {
                "title": "Frontend Mentor",
                "url": "https://www.frontendmentor.io/challenges",
                "type": "web",
            },
        ],
    },
    "python": {
        "subtopics": [
            {
                "title": "Python Syntax and Data Types",
                "description": "Use Python syntax, collections, and built-ins efficiently.",
            },
            {
                "title": "Functions and Modules",
                "description": "Design reusable functions and organize code in modules.",
            },
            {
                "title": "File Handling and Exceptions",
                "description": "Read/write files and handle runtime errors cleanly.",
            },
            {
                "title": "Object-Oriented Python",
                "description": "Build classes and apply inheritance and encapsulation.",
            },
            {
                "title": "Projects and Automation",
                "description": "Build scripts and automate repetitive tasks.",
            },
        ],
        "resources": [
            {"title": "Python Docs", "url": "https://docs.python.org/3/", "type": "web"},
            {
                "title": "Python for Beginners",
                "url": "https://www.youtube.com/results?search_query=python+for+beginners",
                "type": "youtube",
            },
            {
                "title": "Exercism Python Track",
                "url": "https://exercism.org/tracks/python",
                "type": "web",
            },
        ],
    },
}


def _plan_key(topic: str) -> Optional[str]:
    t = topic.lower()
    if "dsa" in t or ("data" in t and "structure" in t):
        return "dsa"
    if "react" in t:
        return "react"
    if "python" in t:
        return "python"
    return None


def predefined_plan(topic: str) -> Optional[Dict[str, List[Dict[str, Any]]]]:
    key = _plan_key(topic)
    return PLANS[key] if key else None
