import json
import warnings
from pathlib import Path
import click
from zwm_core import CodecConfig, FrameWarning
from zwm_core.protocol import CHANNEL_MAX_LENGTH, DEFAULT_BASE
from .logic import load_carrier, verify_carrier

@click.group()
def main():
    pass

@main.command("carrier")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--base", type=click.IntRange(2, 16), default=DEFAULT_BASE, show_default=True)
@click.option("--max-length", type=int, default=CHANNEL_MAX_LENGTH, show_default=True)
def carrier_cmd(path: Path, base: int, max_length: int):
    # Rejections are already reported in the result.
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", FrameWarning)
        result = verify_carrier(load_carrier(path), CodecConfig(base=base, max_length=max_length))
    click.echo(json.dumps(result, sort_keys=True, separators=(",", ":"), ensure_ascii=False))
    if result["status"] != "PASS":
        raise SystemExit(1)

if __name__ == "__main__":
    main()
