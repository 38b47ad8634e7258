"""Signing-side tool: generate keys and mint license files."""
from __future__ import annotations

import os
from datetime import date, datetime
from pathlib import Path
from typing import Optional

import typer

from ..exceptions import CryptoError
from ..license.minting import generate_keypair, mint_license, write_license
from ..license.signing import b64d

app = typer.Typer(help="Scrubby license signing tool (keep the private key off user machines)")

PRIVATE_KEY_ENV = "SCRUBBY_PRIVATE_KEY_B64"


@app.command()
def keygen() -> None:
    """Print a fresh Ed25519 key pair as base64."""
    private_b64, public_b64 = generate_keypair()
    typer.echo(f"PRIVATE_KEY_B64={private_b64}")
    typer.echo(f"PUBLIC_KEY_B64={public_b64}")


@app.command()
def sign(
    email: str = typer.Option(..., "--email"),
    device_id: str = typer.Option(..., "--device-id", help="Output of `scrubby device-id` on the customer machine"),
    plan: str = typer.Option("pro", "--plan"),
    expires: Optional[datetime] = typer.Option(None, "--expires", formats=["%Y-%m-%d"], help="Last valid day (UTC)"),
    out: Path = typer.Option(Path("license.key"), "--out"),
) -> None:
    """Sign a license with the key in $SCRUBBY_PRIVATE_KEY_B64."""
    raw = os.environ.get(PRIVATE_KEY_ENV)
    if not raw:
        typer.echo(f"Missing {PRIVATE_KEY_ENV}", err=True)
        raise typer.Exit(code=1)
    expiry: Optional[date] = expires.date() if expires else None
    try:
        content = mint_license(b64d(raw.strip()), email=email, device_id=device_id, plan=plan, expires=expiry)
    except (CryptoError, ValueError) as exc:
        typer.echo(f"Cannot sign license: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    write_license(out, content)
    typer.echo(f"Wrote {out}")


if __name__ == "__main__":  # pragma: no cover
    app()
