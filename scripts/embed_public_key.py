#!/usr/bin/env python3
"""Bake the license-signing public key into the package before a release build."""
from __future__ import annotations

import argparse
import base64
import binascii
import os
import subprocess
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
BUILDINFO_PATH = REPO_ROOT / "src" / "scrubby" / "_buildinfo.py"
DEV_OVERRIDE_PATH = REPO_ROOT / "src" / "scrubby" / "license" / "devoverride.py"

TEMPLATE = '''"""Values baked in at build time by ``scripts/embed_public_key.py``."""

# Base64 of the raw 32-byte Ed25519 public key that signs Scrubby licenses.
PUBLIC_KEY_B64 = "{key}"

# Source checkouts are development builds; release builds are written with False.
DEV_BUILD = False
'''


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Embed the license public key and optionally build wheels")
    parser.add_argument(
        "--public-key",
        default=os.environ.get("SCRUBBY_PUBLIC_KEY_B64", ""),
        help="Base64 Ed25519 public key (defaults to $SCRUBBY_PUBLIC_KEY_B64)",
    )
    parser.add_argument("--build", action="store_true", help="Run `python -m build` after embedding")
    return parser.parse_args()


def validate(key: str) -> str:
    try:
        raw = base64.b64decode(key.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError) as exc:
        raise SystemExit(f"Public key is not valid base64: {exc}") from exc
    if len(raw) != 32:
        raise SystemExit(f"Public key must decode to 32 bytes, got {len(raw)}")
    return key


def embed(key: str) -> None:
    BUILDINFO_PATH.write_text(TEMPLATE.format(key=key), encoding="utf-8")


def build() -> None:
    subprocess.run([sys.executable, "-m", "build", str(REPO_ROOT)], cwd=REPO_ROOT, check=True)


def main() -> None:
    args = parse_args()
    if not args.public_key:
        raise SystemExit("No public key given; pass --public-key or set SCRUBBY_PUBLIC_KEY_B64")
    original = BUILDINFO_PATH.read_text(encoding="utf-8")
    embed(validate(args.public_key.strip()))
    print(f"Public key written to {BUILDINFO_PATH} (DEV_BUILD = False)")
    if args.build:
        try:
            build()
        finally:
            BUILDINFO_PATH.write_text(original, encoding="utf-8")
        print(f"Built release artifacts without {DEV_OVERRIDE_PATH.name}; restored {BUILDINFO_PATH.name}")


if __name__ == "__main__":
    main()
