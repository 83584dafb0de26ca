"""ZWM - Mention carrier and transcript compiler."""
from __future__ import annotations

import json
from pathlib import Path

import click

from zwm_core import CodecConfig, Record, capacity_report, embed_mention
from zwm_core.mention import agent_label, task_label
from zwm_core.protocol import CHANNEL_MAX_LENGTH, DEFAULT_BASE, KIND_TAGS
from zwm_compile.transcript import compile_transcript

CANONICAL_JSON_KW = {"sort_keys": True, "separators": (",", ":"), "ensure_ascii": False}


def _parse_extra(pairs: tuple[str, ...]) -> dict[str, str] | None:
    if not pairs:
        return None
    extra: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep:
            raise click.BadParameter(f"expected KEY=VALUE, got {pair!r}", param_hint="--extra")
        extra[key] = value
    return extra


def base_option(f):
    return click.option("--base", type=click.IntRange(2, 16), default=DEFAULT_BASE, show_default=True)(f)


@click.group()
def main() -> None:
    pass


@main.command("mention")
@click.option("--kind", type=click.Choice(sorted(KIND_TAGS)), required=True)
@click.option("--name", required=True)
@click.option("--id", "id_", default=None, help="Task identifier")
@click.option("--mode", default=None, help="Agent mode slug")
@click.option("--extra", multiple=True, help="Extra KEY=VALUE field, repeatable")
@click.option("--label", default=None, help="Visible label (default @Task[name] / @Agent[name])")
@click.option("--max-length", type=int, default=CHANNEL_MAX_LENGTH, show_default=True)
@click.option("--report", is_flag=True, help="Print the capacity report instead of the carrier")
@base_option
def mention_cmd(kind, name, id_, mode, extra, label, max_length, report, base) -> None:
    """Build a carrier string for one mention."""
    record = Record(kind=kind, name=name, id=id_, mode=mode, extra=_parse_extra(extra))
    if label is None:
        label = task_label(name) if kind == "task" else agent_label(name)
    try:
        config = CodecConfig(base=base, max_length=max_length)
        if report:
            click.echo(json.dumps(capacity_report(label, record, config).to_dict(), **CANONICAL_JSON_KW))
        else:
            click.echo(embed_mention(label, record, config), nl=False)
    except Exception as e:
        # Fail closed with a single-line reason.
        click.echo(f"FATAL: {e}", err=True)
        raise SystemExit(1)


@main.command("transcript")
@click.argument("transcript", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("out", type=click.Path(path_type=Path))
@base_option
def transcript_cmd(transcript: Path, out: Path, base: int) -> None:
    """Compile a JSONL chat transcript into a mentions table."""
    print(f"Compiling transcript: {transcript}")
    try:
        manifest = compile_transcript(transcript, out, CodecConfig(base=base))
    except Exception as e:
        print(f"FATAL: {e}")
        raise SystemExit(1)

    print(f"PASS: Mentions compiled at {out}")
    print(f"  Messages: {manifest['messages']}")
    print(f"  Mentions: {manifest['mentions']}")
    print(f"  Rejected frames: {manifest['scan_stats']['rejected']}")


if __name__ == "__main__":
    main()
