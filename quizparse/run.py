import logging
from collections import Counter
from pathlib import Path

import hydra
import pandas as pd
from omegaconf import DictConfig, OmegaConf
from tqdm import tqdm

from quizparse.data_models import ExtractionParams
from quizparse.extraction import QuizExtractor
from quizparse.utils import save_jsonl, setup_logging

LOGGER = logging.getLogger(__name__)


class QuizRunner:
    def __init__(self, extractor: QuizExtractor, text_column: str = "completion", print_quiz: bool = False):
        self.extractor = extractor
        self.text_column = text_column
        self.print_quiz = print_quiz

    def run(self, index: int, row: pd.Series) -> dict:
        text = row.get(self.text_column)
        if not isinstance(text, str):
            LOGGER.warning(f"Row {index} has no text in column {self.text_column}, treating it as empty")
            text = ""

        result = self.extractor(text)
        if self.print_quiz:
            for question in result.questions:
                question.pretty_print()
        return {"index": int(index), **result.to_dict()}


def load_completions(filename: Path) -> pd.DataFrame:
    if filename.suffix == ".jsonl":
        return pd.read_json(filename, lines=True)
    return pd.read_csv(filename)


def run_dataset(filename: Path, quiz_runner: QuizRunner, output_file: Path, limit: int | None = None) -> list[dict]:
    df = load_completions(filename)
    if limit is not None:
        df = df.head(limit)
    if quiz_runner.text_column not in df.columns:
        raise ValueError(f"Column {quiz_runner.text_column} not found in {filename}. Got {list(df.columns)}")

    LOGGER.info(f"Processing {len(df)} rows")
    results = [quiz_runner.run(i, row) for i, row in tqdm(df.iterrows(), total=len(df))]

    tier_counts = Counter(tier for result in results for tier in result["tiers"])
    LOGGER.info(f"Processed {len(results)} rows. Tiers used: {dict(tier_counts)}")

    output_file.parent.mkdir(parents=True, exist_ok=True)
    save_jsonl(output_file, results)
    LOGGER.info(f"Saved questions to {output_file}")
    return results


@hydra.main(version_base=None, config_path="conf", config_name="config")
def main(cfg: DictConfig):
    setup_logging(cfg.logging)
    LOGGER.info(f"Using experiment directory {cfg.exp_dir}")
    LOGGER.info(f"Using input file {cfg.input_file}")

    params = ExtractionParams(**OmegaConf.to_container(cfg.extraction, resolve=True))
    LOGGER.info(f"Using extraction params {params}")
    quiz_runner = QuizRunner(QuizExtractor(params), text_column=cfg.text_column, print_quiz=cfg.print_quiz)
    run_dataset(Path(cfg.input_file), quiz_runner, Path(cfg.output_file), limit=cfg.limit)


if __name__ == "__main__":
    main()
