from __future__ import annotations

import asyncio
import os
import time
import unittest
from typing import Dict, List

import dotenv

from mention_gateway.config import GatewayConfig
from mention_gateway.router.classifier import CommandClassifier
from tests.test_data import DATASET, ORIGINAL_TWEETS

dotenv.load_dotenv()


@unittest.skipUnless(
    os.getenv("CLASSIFIER_EVAL", "").strip().lower() in {"1", "true", "yes"},
    "set CLASSIFIER_EVAL=1 to run against a live completion service",
)
class TestClassifierEval(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls.config = GatewayConfig.from_env()
        cls.classifier = CommandClassifier(cls.config)
        cls.min_accuracy = float(os.getenv("CLASSIFIER_EVAL_MIN_ACCURACY", "0.8"))

    def test_eval_dataset(self) -> None:
        failures: List[str] = []
        latencies_ms: Dict[str, float] = {}

        for case in DATASET:
            start = time.perf_counter()
            category = asyncio.run(
                self.classifier.classify(case.command, ORIGINAL_TWEETS[case.tweet_key])
            )
            latencies_ms[case.name] = (time.perf_counter() - start) * 1000

            if category is not case.expected:
                failures.append(f"{case.name}: got {category.value!r}, expected {case.expected.value!r}")

        accuracy = 1 - len(failures) / len(DATASET)
        avg_ms = sum(latencies_ms.values()) / len(latencies_ms)
        print(f"\nmodel={self.config.classifier_model} accuracy={accuracy:.2f} avg_latency_ms={avg_ms:.0f}")
        for failure in failures:
            print(f"  FAIL {failure}")

        self.assertGreaterEqual(accuracy, self.min_accuracy, "\n".join(failures))


if __name__ == "__main__":
    unittest.main()
