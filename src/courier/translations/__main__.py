from __future__ import annotations

import argparse
import json
import sys

from courier.core.config import load_config
from courier.core.http import Networking
from courier.core.logging import configure_logging

from .client import DEFAULT_BASE_URL, DEFAULT_TRANSLATION, TranslationClient


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Translate text through the fun translations API")
    parser.add_argument("text", help="Text to translate")
    parser.add_argument("--translation", default=DEFAULT_TRANSLATION, help="Translation name, e.g. yoda or pirate")
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL, help="Translation API base URL")
    parser.add_argument("--retries", type=int, default=3, help="Retries on transient network errors (max 10)")
    parser.add_argument("--config", default=None, help="YAML config file (defaults to COURIER_* environment)")
    parser.add_argument("--json", action="store_true", help="Print the full JSON response")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    config = load_config(args.config)
    configure_logging(config.logging)

    networking = Networking(settings=config.http)
    try:
        client = TranslationClient(base_url=args.base_url, networking=networking, max_retries=args.retries)
        result = client.translate_blocking(args.text, translation=args.translation)
    finally:
        networking.shutdown()

    if not result.is_success:
        print(f"error: {result.error}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(result.value.model_dump(), indent=2), flush=True)
    else:
        print(result.value.contents.translated, flush=True)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
