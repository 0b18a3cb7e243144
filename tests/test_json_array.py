import json
import unittest

from quizparse.extraction.json_array import extract_json_questions, find_json_array


def make_records(n: int) -> list[dict]:
    return [
        {
            "question": f"What is {i} + {i}?",
            "options": [str(2 * i - 1), str(2 * i), str(2 * i + 1), str(2 * i + 2)],
            "correctAnswer": 1,
        }
        for i in range(1, n + 1)
    ]


class JsonArrayTestCase(unittest.TestCase):
    def test_finds_array_surrounded_by_prose(self):
        records = make_records(3)
        text = f"Sure! Here are your questions:\n```json\n{json.dumps(records, indent=2)}\n```\nGood luck with the exam."
        self.assertEqual(find_json_array(text), records)

    def test_extracts_questions_in_order(self):
        records = make_records(12)
        questions = extract_json_questions(f"Here you go: {json.dumps(records)}")
        self.assertEqual([question.to_dict() for question in questions], records)

    def test_no_array(self):
        self.assertIsNone(find_json_array("1. What is a cell?\nA. x\nB. y"))
        self.assertEqual(extract_json_questions("no json here"), [])
        self.assertEqual(extract_json_questions(""), [])

    def test_array_without_question_key_is_ignored(self):
        self.assertIsNone(find_json_array('[{"prompt": "What?", "options": []}]'))

    def test_malformed_json_raises(self):
        text = '[{"question": "What is 1 + 1?", "options": ["1", "2", "3", "4"], "correctAnswer": 1,}]'
        with self.assertRaises(json.JSONDecodeError):
            extract_json_questions(text)

    def test_truncated_json_is_not_found(self):
        records = make_records(3)
        truncated = json.dumps(records)[:-40]
        self.assertEqual(extract_json_questions(truncated), [])

    def test_drops_invalid_elements(self):
        records = make_records(4)
        records[1]["options"] = ["only", "three", "options"]
        records[2]["correctAnswer"] = 7
        questions = extract_json_questions(json.dumps(records))
        self.assertEqual([question.question for question in questions], ["What is 1 + 1?", "What is 4 + 4?"])

    def test_idempotent(self):
        text = json.dumps(make_records(10))
        first = [question.to_dict() for question in extract_json_questions(text)]
        second = [question.to_dict() for question in extract_json_questions(text)]
        self.assertEqual(first, second)


if __name__ == "__main__":
    unittest.main()
