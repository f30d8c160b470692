"""
Sample questions for local development and seeding.

Served directly by the in-memory store when ``QUESTION_STORE_MOCK`` is
set, and inserted into PostgreSQL by ``scripts/seed_questions.py``.
"""

SAMPLE_QUESTIONS: list[dict] = [
    {
        "title": "Reverse a String",
        "difficulty": "Easy",
        "topics": ["Strings"],
        "problem_statement": "Write a function that reverses a string given as a list of characters.",
        "constraints": ["1 <= s.length <= 10^5", "s[i] is a printable ascii character."],
        "examples": [
            {"input": 's = ["h","e","l","l","o"]', "output": '["o","l","l","e","h"]'},
        ],
        "code_snippets": [
            {"language": "python", "code": "def reverse_string(s):\n    pass\n"},
        ],
        "entry_point": "reverse_string",
        "signature": {"params": [{"name": "s", "type": "list[str]"}], "returnType": "list[str]"},
        "test_cases": [
            {"args": [["h", "e", "l", "l", "o"]], "expected": ["o", "l", "l", "e", "h"]},
            {"args": [["H", "a", "n", "n", "a", "h"]], "expected": ["h", "a", "n", "n", "a", "H"], "hidden": True},
        ],
    },
    {
        "title": "Two Sum",
        "difficulty": "Easy",
        "topics": ["Arrays", "Hashmap"],
        "problem_statement": (
            "Given an array of integers nums and an integer target, return indices "
            "of the two numbers such that they add up to target."
        ),
        "constraints": ["2 <= nums.length <= 10^4", "Only one valid answer exists."],
        "examples": [
            {
                "input": "nums = [2,7,11,15], target = 9",
                "output": "[0,1]",
                "explanation": "Because nums[0] + nums[1] == 9, we return [0, 1].",
            },
        ],
        "entry_point": "two_sum",
        "signature": {
            "params": [{"name": "nums", "type": "list[int]"}, {"name": "target", "type": "int"}],
            "returnType": "list[int]",
        },
        "test_cases": [
            {"args": [[2, 7, 11, 15], 9], "expected": [0, 1]},
            {"args": [[3, 2, 4], 6], "expected": [1, 2], "hidden": True},
        ],
    },
    {
        "title": "Number of Islands",
        "difficulty": "Medium",
        "topics": ["Graphs"],
        "problem_statement": (
            "Given an m x n grid of '1's (land) and '0's (water), return the number of islands."
        ),
        "constraints": ["1 <= m, n <= 300"],
        "examples": [
            {"input": 'grid = [["1","1","0"],["0","1","0"],["0","0","1"]]', "output": "2"},
        ],
        "entry_point": "num_islands",
        "test_cases": [
            {"args": [[["1", "1", "0"], ["0", "1", "0"], ["0", "0", "1"]]], "expected": 2},
        ],
    },
    {
        "title": "Course Schedule",
        "difficulty": "Medium",
        "topics": ["Graphs"],
        "problem_statement": (
            "There are numCourses courses labelled 0 to numCourses - 1. Given the "
            "prerequisite pairs, return true if you can finish all courses."
        ),
        "constraints": ["1 <= numCourses <= 2000", "0 <= prerequisites.length <= 5000"],
        "examples": [
            {"input": "numCourses = 2, prerequisites = [[1,0]]", "output": "true"},
        ],
        "entry_point": "can_finish",
        "test_cases": [
            {"args": [2, [[1, 0]]], "expected": True},
            {"args": [2, [[1, 0], [0, 1]]], "expected": False},
        ],
    },
    {
        "title": "Kth Largest Element in an Array",
        "difficulty": "Medium",
        "topics": ["Heaps", "Arrays"],
        "problem_statement": "Return the kth largest element in an unsorted integer array.",
        "constraints": ["1 <= k <= nums.length <= 10^5"],
        "examples": [{"input": "nums = [3,2,1,5,6,4], k = 2", "output": "5"}],
        "entry_point": "find_kth_largest",
        "test_cases": [{"args": [[3, 2, 1, 5, 6, 4], 2], "expected": 5}],
    },
    {
        "title": "Edit Distance",
        "difficulty": "Hard",
        "topics": ["Dynamic Programming", "Strings"],
        "problem_statement": (
            "Given two strings word1 and word2, return the minimum number of "
            "operations required to convert word1 to word2."
        ),
        "constraints": ["0 <= word1.length, word2.length <= 500"],
        "examples": [{"input": 'word1 = "horse", word2 = "ros"', "output": "3"}],
        "entry_point": "min_distance",
        "timeout": 2,
        "test_cases": [{"args": ["horse", "ros"], "expected": 3}],
    },
    {
        "title": "Merge k Sorted Lists",
        "difficulty": "Hard",
        "topics": ["Linked List", "Heaps"],
        "problem_statement": "Merge k sorted linked lists and return it as one sorted list.",
        "constraints": ["0 <= k <= 10^4"],
        "examples": [{"input": "lists = [[1,4,5],[1,3,4],[2,6]]", "output": "[1,1,2,3,4,4,5,6]"}],
        "entry_point": "merge_k_lists",
        "test_cases": [{"args": [[[1, 4, 5], [1, 3, 4], [2, 6]]], "expected": [1, 1, 2, 3, 4, 4, 5, 6]}],
    },
    {
        "title": "Jump Game",
        "difficulty": "Medium",
        "topics": ["Greedy", "Arrays"],
        "problem_statement": (
            "You are given an integer array nums. You are initially positioned at the "
            "first index. Return true if you can reach the last index."
        ),
        "constraints": ["1 <= nums.length <= 10^4"],
        "examples": [{"input": "nums = [2,3,1,1,4]", "output": "true"}],
        "entry_point": "can_jump",
        "test_cases": [
            {"args": [[2, 3, 1, 1, 4]], "expected": True},
            {"args": [[3, 2, 1, 0, 4]], "expected": False},
        ],
    },
]
