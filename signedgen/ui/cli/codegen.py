"""
CLI commands for signed, partially generated files.

Thin wrappers over ``signedgen.core.codegen`` and
``signedgen.core.persistence.writer``.
"""

from __future__ import annotations

import json
import sys
import warnings
from pathlib import Path

import click

from signedgen.core.errors import CodegenError, ConfigError, DroppedRegionWarning
from signedgen.core.models.config import CodegenConfig


def _load_config(ctx: click.Context) -> CodegenConfig:
    """Load codegen.yml from --config or by searching upward; exit on error."""
    from signedgen.core.config.loader import load_config

    try:
        return load_config(ctx.obj.get("config_path"))
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)


# ── Verify ──────────────────────────────────────────────────────


@click.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path(path_type=Path))
@click.option("--strict", is_flag=True, help="Also fail on files that carry no signature.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def verify(ctx: click.Context, paths: tuple[Path, ...], strict: bool, as_json: bool) -> None:
    """Check the signature of generated files."""
    from signedgen.core.codegen.signature import SignatureCodec
    from signedgen.core.models.results import SignatureVerdict
    from signedgen.core.persistence.writer import read_existing

    config = _load_config(ctx)
    failed = False
    report: list[dict] = []

    for path in paths:
        if not path.is_file():
            failed = True
            report.append({"path": str(path), "verdict": None, "error": "file not found"})
            continue

        check = SignatureCodec.for_path(path, config).verify(read_existing(path))
        if check.verdict == SignatureVerdict.INVALID or (
            strict and check.verdict == SignatureVerdict.ABSENT
        ):
            failed = True
        report.append({"path": str(path), **check.model_dump(mode="json")})

    if as_json:
        click.echo(json.dumps(report, indent=2))
    else:
        for entry in report:
            verdict = entry["verdict"]
            if verdict is None:
                click.secho(f"❌ {entry['path']} — {entry['error']}", fg="red")
            elif verdict == SignatureVerdict.VALID:
                click.secho(f"✅ {entry['path']} — valid ({entry['kind']})", fg="green")
            elif verdict == SignatureVerdict.ABSENT:
                click.secho(f"⚪ {entry['path']} — not signed", fg="yellow")
            else:
                click.secho(f"❌ {entry['path']} — invalid: {entry['reason']}", fg="red")

    if failed:
        sys.exit(1)


# ── Regions ─────────────────────────────────────────────────────


@click.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def regions(ctx: click.Context, path: Path, as_json: bool) -> None:
    """List the manual regions of a file."""
    from signedgen.core.codegen.regions import RegionMarker
    from signedgen.core.persistence.writer import read_existing

    config = _load_config(ctx)
    marker = RegionMarker(config.comment_style_for(path))
    try:
        found = marker.extract_all(read_existing(path))
    except CodegenError as e:
        click.secho(f"❌ {path}: {e}", fg="red", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(found, indent=2))
        return

    if not found:
        click.secho(f"No manual regions in {path}", fg="yellow")
        return

    click.secho(f"📝 {path}: {len(found)} manual region(s)", fg="cyan", bold=True)
    for name, content in found.items():
        lines = content.count("\n")
        click.echo(f"   • {name} ({lines} line{'s' if lines != 1 else ''})")


# ── Generate ────────────────────────────────────────────────────


@click.command()
@click.argument("schema_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--out", "-o", "out_path", type=click.Path(path_type=Path), default=None,
              help="Output file (default: schema 'path', next to the schema).")
@click.option("--check", is_flag=True, help="Don't write; exit 1 if the file would change.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def generate(
    ctx: click.Context,
    schema_path: Path,
    out_path: Path | None,
    check: bool,
    as_json: bool,
) -> None:
    """Generate a record class from a schema YAML and save it."""
    from signedgen.core.persistence.writer import FileWriter
    from signedgen.core.services.generators.record import generate_record, load_schema

    config = _load_config(ctx)
    try:
        schema = load_schema(schema_path)
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    target = out_path or schema_path.parent / (schema.path or schema.default_path())
    document = generate_record(schema, config, path=target)
    writer = FileWriter(config)

    try:
        with warnings.catch_warnings():
            # Dropped regions are reported from the result below.
            warnings.simplefilter("ignore", DroppedRegionWarning)
            result = writer.check(document) if check else writer.save(document)
    except CodegenError as e:
        if as_json:
            click.echo(json.dumps({"path": str(target), "error": str(e)}, indent=2))
        else:
            click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(result.model_dump(mode="json"), indent=2))
    else:
        quiet = ctx.obj.get("quiet", False)
        if check and result.changed:
            click.secho(f"⚠️  {result.path} would be {result.outcome.value}", fg="yellow")
        elif not quiet:
            click.secho(f"✅ {result.path} — {result.outcome.value}", fg="green")
        if result.preserved and not quiet:
            click.echo(f"   Preserved: {', '.join(result.preserved)}")
        for region in result.dropped:
            click.secho(f"   ⚠️  Dropped manual region '{region.name}':", fg="yellow")
            for line in region.content.splitlines():
                click.echo(f"      {line}")

    if check and result.changed:
        sys.exit(1)
