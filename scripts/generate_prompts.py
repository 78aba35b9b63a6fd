#!/usr/bin/env python3
"""
Generate a Veo prompt set from the command line.

Usage:
    python scripts/generate_prompts.py "Cải tạo phòng ngủ cũ" --count 3
    python scripts/generate_prompts.py "" --image before.jpg --image detail.png --style Cinematic
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from modules.prompt_master.credentials import SettingsCredentialBroker
from modules.prompt_master.error_classifier import classify, user_message
from modules.prompt_master.session import PromptSession
from shared.errors import PipelineError
from shared.image_processing import load_reference_images
from shared.logging import get_logger
from shared.models.prompt import AUTO_STYLE_LABEL, DEFAULT_COUNT, SUPPORTED_COUNTS, StyleKind

logger = get_logger("generate_prompts")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate a multi-shot Veo prompt set")
    parser.add_argument("title", help="Short title of the story (may be empty when images are given)")
    parser.add_argument(
        "--count",
        type=int,
        default=DEFAULT_COUNT,
        choices=SUPPORTED_COUNTS,
        help="Number of image prompts",
    )
    parser.add_argument(
        "--style",
        default=AUTO_STYLE_LABEL,
        help=f"One of: {AUTO_STYLE_LABEL}, " + ", ".join(kind.value for kind in StyleKind),
    )
    parser.add_argument(
        "--image",
        action="append",
        default=[],
        dest="images",
        help="Reference image path (repeatable, first 3 are used)",
    )
    parser.add_argument("--api-key", default=None, help="Override the configured API key")
    return parser


async def run(args: argparse.Namespace) -> int:
    broker = SettingsCredentialBroker(api_key=args.api_key)
    session = PromptSession(broker)
    state = await session.initialize()
    if not state.credential_known:
        logger.warning("No API key configured; the model call will be rejected")

    try:
        images = await load_reference_images(args.images)
        result = await session.generate(args.title, args.count, args.style, images)
    except PipelineError as exc:
        kind = classify(exc)
        print(
            json.dumps(
                {"code": exc.code, "message": user_message(kind, exc), "detail": exc.message},
                ensure_ascii=False,
                indent=2,
            ),
            file=sys.stderr,
        )
        return 1

    print(json.dumps(result.model_dump(by_alias=True), ensure_ascii=False, indent=2))
    return 0


def main() -> None:
    args = build_parser().parse_args()
    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
