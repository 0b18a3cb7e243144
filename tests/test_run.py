import json
import random
import tempfile
import unittest
from pathlib import Path

import pandas as pd

from quizparse.data_models import ExtractionParams
from quizparse.extraction import QuizExtractor
from quizparse.run import QuizRunner, load_completions, run_dataset
from quizparse.utils import load_jsonl

RECORDS = [
    {"question": f"What is {i} squared?", "options": ["1", "4", "9", str(i * i)], "correctAnswer": 3}
    for i in range(5, 10)
]
STRUCTURED = "\n\n".join(
    f"{i}. Which answer is number {i}?\nA. one\nB. two\nC. three\nD. four\nCorrect answer: C" for i in range(1, 6)
)


class RunDatasetTestCase(unittest.TestCase):
    def setUp(self):
        self.tmp_dir = tempfile.TemporaryDirectory()
        self.exp_dir = Path(self.tmp_dir.name)
        extractor = QuizExtractor(ExtractionParams(count=5), rng=random.Random(0))
        self.quiz_runner = QuizRunner(extractor, text_column="completion")

    def tearDown(self):
        self.tmp_dir.cleanup()

    def test_run_dataset_csv(self):
        filename = self.exp_dir / "completions.csv"
        pd.DataFrame({"completion": [json.dumps(RECORDS), STRUCTURED, None]}).to_csv(filename, index=False)
        output_file = self.exp_dir / "out" / "questions.jsonl"

        results = run_dataset(filename, self.quiz_runner, output_file)
        saved = load_jsonl(output_file)
        self.assertEqual(saved, results)
        self.assertEqual([row["index"] for row in saved], [0, 1, 2])
        self.assertEqual(saved[0]["questions"], RECORDS)
        self.assertEqual(saved[0]["tiers"], ["json"])
        self.assertEqual(saved[1]["tiers"], ["structured"])
        self.assertEqual([q["correctAnswer"] for q in saved[1]["questions"]], [2] * 5)
        self.assertEqual(saved[2]["tiers"], ["fallback"])
        for row in saved:
            self.assertEqual(len(row["questions"]), 5)

    def test_run_dataset_jsonl_with_limit(self):
        filename = self.exp_dir / "completions.jsonl"
        with open(filename, "w") as f:
            for text in [STRUCTURED, "nothing useful", "more of nothing"]:
                f.write(json.dumps({"completion": text}) + "\n")
        output_file = self.exp_dir / "questions.jsonl"

        results = run_dataset(filename, self.quiz_runner, output_file, limit=2)
        self.assertEqual(len(results), 2)
        self.assertEqual(len(load_jsonl(output_file)), 2)

    def test_missing_text_column(self):
        filename = self.exp_dir / "completions.csv"
        pd.DataFrame({"response": ["text"]}).to_csv(filename, index=False)
        with self.assertRaises(ValueError):
            run_dataset(filename, self.quiz_runner, self.exp_dir / "questions.jsonl")

    def test_load_completions(self):
        filename = self.exp_dir / "completions.csv"
        pd.DataFrame({"completion": ["a", "b"]}).to_csv(filename, index=False)
        self.assertEqual(list(load_completions(filename)["completion"]), ["a", "b"])

    def test_print_quiz(self):
        quiz_runner = QuizRunner(QuizExtractor(ExtractionParams(count=1)), print_quiz=True)
        row = pd.Series({"completion": json.dumps(RECORDS)})
        result = quiz_runner.run(0, row)
        self.assertEqual(result["questions"], RECORDS[:1])


if __name__ == "__main__":
    unittest.main()
