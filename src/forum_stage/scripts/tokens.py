# src/forum_stage/scripts/tokens.py
"""
Mint access tokens for local development and manual API testing.

Usage:
    python -m forum_stage.scripts.tokens 1 --username alice --show-nsfw
"""
from __future__ import annotations

import argparse

from forum_stage.core.security import create_access_token


def build_parser() -> argparse.ArgumentParser:
    """Return the command-line parser for the token script."""
    parser = argparse.ArgumentParser(description="Mint a development access token.")
    parser.add_argument("user_id", type=int, help="Identifier of the user to issue the token for")
    parser.add_argument("--username", default=None, help="Display name stored in the claims")
    parser.add_argument(
        "--show-nsfw",
        action="store_true",
        help="Mark the token holder as wanting nsfw posts shown",
    )
    parser.add_argument(
        "--expires-minutes",
        type=int,
        default=None,
        help="Token lifetime; defaults to ACCESS_TOKEN_EXPIRE_MINUTES",
    )
    return parser


def main(argv: list[str] | None = None) -> str:
    """Parse arguments, print the token and return it."""
    args = build_parser().parse_args(argv)
    token = create_access_token(
        args.user_id,
        username=args.username,
        show_nsfw=args.show_nsfw,
        expires_minutes=args.expires_minutes,
    )
    print(token)
    return token


if __name__ == "__main__":
    main()
