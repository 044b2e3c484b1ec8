from __future__ import annotations

import asyncio
from typing import List

import dotenv

from mention_gateway.config import GatewayConfig
from mention_gateway.router.classifier import CommandClassifier


dotenv.load_dotenv()


async def run_examples() -> None:
    config = GatewayConfig.from_env()
    classifier = CommandClassifier(config)

    tweet = "Scientists confirm that cats can fly if they believe hard enough."
    commands: List[str] = [
        "is this true?",
        "make this into a meme",
        # "what's the sentiment here",
        # "make a thread about this",
        "explain this tweet",
    ]

    for i, command in enumerate(commands, start=1):
        category = await classifier.classify(command, tweet)
        print("=" * 80)
        print(f"Example #{i}")
        print(f"Command: {command}")
        print(f"Category: {category.value}")
        print(f"Endpoint: {config.endpoint_url(config.endpoints[category])}")


def main() -> None:
    asyncio.run(run_examples())


if __name__ == "__main__":
    main()
