"""Command-line interface for the AES cipher.

Works on hex strings only: no files, no padding. Content must already be
block-aligned.
"""

from __future__ import annotations

import sys

import click

from . import __version__
from .block import encrypt as encrypt_block
from .config import CipherConfig
from .errors import AESError
from .key_schedule import KeySchedule
from .metrics import AVALANCHE_TARGETS, measure_avalanche
from .modes import MODES, list_modes, process
from .reference import FIPS_197_TEST_VECTORS, SP800_38A_CBC_AES128
from .trace import TraceRecorder, print_header, print_result
from .utils import bytes_to_hex, format_bytes_grid, hex_to_bytes


def _parse_hex(value: str, what: str) -> bytes:
    try:
        return hex_to_bytes(value)
    except ValueError as e:
        raise click.BadParameter(f"invalid hex for {what}: {e}")


@click.group()
@click.version_option(version=__version__, prog_name="aes-cipher")
def main() -> None:
    """AES (FIPS-197) block cipher with ECB and CBC modes.

    Keys, IVs and data are given as hex strings.
    """
    pass


@main.command(name="list")
def list_cmd() -> None:
    """List available modes of operation."""
    click.echo("Available modes:")
    click.echo("")
    for mode in list_modes():
        click.echo(f"  {mode['name']}")
        click.echo(f"    {mode['description']}")
        click.echo("")


def _mode_options(func):
    options = [
        click.option("--mode", type=click.Choice(list(MODES)), default="ecb",
                     help="Mode of operation (default: ecb)"),
        click.option("--key", "key_hex", type=str, required=True,
                     help="Key as 32, 48 or 64 hex chars"),
        click.option("--key-size", type=int, default=None,
                     help="Key size in bits (default: inferred from --key)"),
        click.option("--iv", "iv_hex", type=str, default=None,
                     help="16-byte IV as hex (CBC only)"),
        click.option("--data", "data_hex", type=str, required=True,
                     help="Block-aligned input as hex"),
        click.option("--workers", type=int, default=1,
                     help="Worker threads for parallel block steps (default: 1)"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _run_mode(
    decrypting: bool,
    mode: str,
    key_hex: str,
    key_size: int | None,
    iv_hex: str | None,
    data_hex: str,
    workers: int,
) -> None:
    key = _parse_hex(key_hex, "--key")
    data = bytearray(_parse_hex(data_hex, "--data"))
    iv = _parse_hex(iv_hex, "--iv") if iv_hex is not None else None

    try:
        if key_size is None:
            config = CipherConfig.for_key(key, mode=mode, workers=workers)
        else:
            config = CipherConfig(key_size_bits=key_size, mode=mode, workers=workers)
        process(data, key, config, iv=iv, decrypting=decrypting)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(bytes_to_hex(data))


@main.command()
@_mode_options
def encrypt(mode, key_hex, key_size, iv_hex, data_hex, workers) -> None:
    """Encrypt block-aligned hex data."""
    _run_mode(False, mode, key_hex, key_size, iv_hex, data_hex, workers)


@main.command()
@_mode_options
def decrypt(mode, key_hex, key_size, iv_hex, data_hex, workers) -> None:
    """Decrypt block-aligned hex data."""
    _run_mode(True, mode, key_hex, key_size, iv_hex, data_hex, workers)


@main.command()
@click.option("--verbose", "-v", is_flag=True, help="Show passing vectors too")
def kat(verbose: bool) -> None:
    """Run the FIPS-197 and SP 800-38A known-answer tests."""
    passed = 0
    failed = 0

    for vec in FIPS_197_TEST_VECTORS:
        schedule = KeySchedule.from_key(vec["key"], vec["key_size"])
        block = bytearray(vec["plaintext"])
        encrypt_block(block, schedule.round_keys, schedule.rounds)
        if bytes(block) == vec["ciphertext"]:
            passed += 1
            if verbose:
                click.echo(f"  {vec['name']} (AES-{vec['key_size']}): PASS")
        else:
            failed += 1
            click.echo(
                f"  {vec['name']} (AES-{vec['key_size']}): FAIL - "
                f"expected {vec['ciphertext'].hex()}, got {bytes_to_hex(block)}"
            )

    cbc = SP800_38A_CBC_AES128
    content = bytearray(cbc["plaintext"])
    process(content, cbc["key"], CipherConfig(mode="cbc"), iv=cbc["iv"])
    if bytes(content) == cbc["ciphertext"]:
        passed += 1
        if verbose:
            click.echo("  SP 800-38A CBC-AES128: PASS")
    else:
        failed += 1
        click.echo("  SP 800-38A CBC-AES128: FAIL")

    total = passed + failed
    click.echo("")
    if failed == 0:
        click.echo(f"KAT PASSED: All {total} vectors passed")
        sys.exit(0)
    else:
        click.echo(f"KAT FAILED: {failed}/{total} vectors failed")
        sys.exit(1)


@main.command()
@click.option("--key", "key_hex", type=str,
              default="2b7e151628aed2a6abf7158809cf4f3c",
              help="Key as hex (default: FIPS-197 Appendix B)")
@click.option("--pt", "pt_hex", type=str,
              default="3243f6a8885a308d313198a2e0370734",
              help="16-byte plaintext as hex (default: FIPS-197 Appendix B)")
@click.option("--trace-file", type=click.File("w"), default=None,
              help="Write JSON Lines trace to this file")
@click.option("--quiet", "-q", is_flag=True, help="Suppress per-operation lines")
def trace(key_hex: str, pt_hex: str, trace_file, quiet: bool) -> None:
    """Encrypt one block and print the state after every operation."""
    key = _parse_hex(key_hex, "--key")
    plaintext = _parse_hex(pt_hex, "--pt")

    try:
        schedule = KeySchedule.from_key(key, len(key) * 8)
        block = bytearray(plaintext)
        tracer = TraceRecorder(verbose=not quiet, trace_file=trace_file)
        print_header(f"AES-{schedule.key_size} single block, {schedule.rounds} rounds")
        print(format_bytes_grid(block))
        encrypt_block(block, schedule.round_keys, schedule.rounds, tracer=tracer)
    except AESError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    print_result(bytes_to_hex(block))


@main.command()
@click.option("--key-size", type=click.Choice(["128", "192", "256"]), default="128",
              help="Key size in bits (default: 128)")
@click.option("--target", type=click.Choice(list(AVALANCHE_TARGETS)), default="plaintext",
              help="Input whose bit is flipped (default: plaintext)")
@click.option("--n", "samples", type=int, default=100,
              help="Number of trials (default: 100)")
@click.option("--seed", type=int, default=None, help="Random seed for reproducibility")
def avalanche(key_size: str, target: str, samples: int, seed: int | None) -> None:
    """Measure the single-bit avalanche effect."""
    result = measure_avalanche(int(key_size), samples, target=target, seed=seed)
    click.echo(f"AES-{result.key_size}, flipping one {result.target} bit, {result.samples} trials")
    click.echo(f"  Mean changed bits: {result.mean_fraction:.2%}")
    click.echo(f"  Min:  {result.min_fraction:.2%}")
    click.echo(f"  Max:  {result.max_fraction:.2%}")


if __name__ == "__main__":
    main()
