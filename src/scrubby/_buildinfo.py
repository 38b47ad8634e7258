"""Values baked in at build time by ``scripts/embed_public_key.py``."""

# Base64 of the raw 32-byte Ed25519 public key that signs Scrubby licenses.
PUBLIC_KEY_B64 = ""

# Source checkouts are development builds; release builds are written with False.
DEV_BUILD = True
