"""CLI commands implemented with click.

`bkp` without a subcommand performs a backup run (same as `bkp run`).
"""
from __future__ import annotations
import logging
import click
from pathlib import Path
from config.settings import EXIT_CONFIG_DIR, EXIT_MANIFEST
from bkp.lib.errors import ConfigDirError, ManifestError
from bkp.lib.logs import setup_logging, teardown_logging
from bkp.lib.paths import config_dir as resolve_config_dir, log_path, manifest_path
from bkp.lib.runner import BackupRunner

@click.group(invoke_without_command=True)
@click.option('--config-dir', type=click.Path(file_okay=False, path_type=Path), default=None,
	help='Use this folder instead of the per-user config folder (also $BKP_CONFIG_DIR).')
@click.option('-q', '--quiet', is_flag=True, help='Only show warnings and errors on the console.')
@click.option('-v', '--verbose', is_flag=True, help='Show debug output on the console.')
@click.pass_context
def cli(ctx, config_dir, quiet, verbose):
	"""bkp - back up the folders listed in bkp.txt"""
	level = logging.DEBUG if verbose else logging.WARNING if quiet else logging.INFO
	ctx.ensure_object(dict)
	ctx.obj.update(config_dir=config_dir, level=level)
	if ctx.invoked_subcommand is None:
		ctx.invoke(run)

def _config_dir(ctx) -> Path:
	try:
		return resolve_config_dir(ctx.obj.get('config_dir'))
	except ConfigDirError as e:
		# logging is not configured yet
		click.echo(f'Error: {e}', err=True)
		ctx.exit(EXIT_CONFIG_DIR)

def _load(ctx, cfg: Path):
	try:
		return BackupRunner(cfg).load()
	except ManifestError as e:
		click.echo(f'Error in {manifest_path(cfg)}: {e}', err=True)
		ctx.exit(EXIT_MANIFEST)

def _describe(e) -> str:
	mode = 'overwrite' if e.overwrite else 'snapshot'
	return f"{e.name}: {e.source or '<empty>'} -> {e.destination} [{mode}]"

@cli.command()
@click.pass_context
def run(ctx):
	"""Back up every entry of the manifest."""
	cfg = _config_dir(ctx)
	logger = setup_logging(cfg, ctx.obj['level'])
	try:
		report = BackupRunner(cfg, logger).run()
	except ManifestError as e:
		logger.error("Unable to use manifest %s: %s", manifest_path(cfg), e)
		ctx.exit(EXIT_MANIFEST)
	finally:
		teardown_logging(logger)
	ctx.exit(report.exit_code)

@cli.command()
@click.pass_context
def check(ctx):
	"""Validate the manifest without copying anything."""
	cfg = _config_dir(ctx)
	manifest = _load(ctx, cfg)
	if not manifest:
		click.echo(f'Manifest OK, nothing to back up, edit file at {manifest_path(cfg)}')
		return
	click.echo(f'Manifest OK: {len(manifest)} entr{"y" if len(manifest) == 1 else "ies"}.')
	for e in manifest:
		click.echo(_describe(e))

@cli.command('list')
@click.pass_context
def list_entries(ctx):
	"""List manifest entries with their resolved destination."""
	cfg = _config_dir(ctx)
	for e in _load(ctx, cfg):
		click.echo(_describe(e))

@cli.command()
@click.pass_context
def where(ctx):
	"""Show where the manifest and the log file live."""
	cfg = _config_dir(ctx)
	click.echo(f"Manifest: {manifest_path(cfg)}\nLog:      {log_path(cfg)}")
