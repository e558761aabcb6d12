"""Main CLI entrypoint using Typer."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer

from tableflow import __version__
from tableflow.config import PipelineConfig
from tableflow.data.hashing import compute_table_hash, get_file_metadata
from tableflow.data.loaders import infer_format, load_table, save_table
from tableflow.data.spec import DataFormat
from tableflow.data.validation import generate_missingness_report
from tableflow.errors import TableflowError
from tableflow.pipeline import iter_batches, prepare_dataset

app = typer.Typer(
    name="tableflow",
    help="Load tabular files and prepare them for ML: shuffle, split and batch.",
    add_completion=False,
)

# Logging setup
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        typer.echo(f"tableflow {__version__}")
        raise typer.Exit()


def _fail(e: Exception) -> None:
    typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


def _build_config(config_path: Optional[Path] = None, **overrides) -> PipelineConfig:
    """Defaults, then the config file (if any), then options that were given."""
    config = PipelineConfig.load(config_path) if config_path else PipelineConfig()
    return config.with_overrides(**overrides)


def _run_prepare(config: PipelineConfig) -> None:
    try:
        prepared = prepare_dataset(config)
        n_batches = None
        if config.batch_size is not None:
            n_batches = sum(
                1
                for _ in iter_batches(
                    prepared.X_train,
                    config.batch_size,
                    shuffle=config.shuffle,
                    seed=config.seed,
                )
            )
    except TableflowError as e:
        _fail(e)

    summary = prepared.summary()
    typer.secho(f"\n✓ Prepared dataset {summary['dataset_id']}", fg=typer.colors.GREEN)
    typer.echo(f"  Created: {summary['timestamp']}")
    typer.echo(f"  Rows: {summary['n_rows']}")
    typer.echo(f"  Features: {summary['n_features']} ({', '.join(summary['feature_columns'])})")
    typer.echo(f"  Target: {summary['target_col']}")
    typer.echo(f"  Train rows: {summary['n_train']}")
    typer.echo(f"  Test rows: {summary['n_test']}")
    if n_batches is not None:
        typer.echo(f"  Train batches (batch size {config.batch_size}): {n_batches}")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    format: Optional[str] = typer.Option(
        None,
        "--format",
        "-f",
        help="Input format: csv, json or parquet (default: inferred from the file suffix)",
    ),
    input_path: Optional[Path] = typer.Option(
        None,
        "--input",
        "-i",
        help="Path to the input file (default: data/security_dataset.csv)",
    ),
    target: Optional[str] = typer.Option(
        None,
        "--target",
        "-t",
        help="Name of the target column (default: target)",
    ),
    test_ratio: Optional[float] = typer.Option(
        None,
        "--test_ratio",
        "--test-ratio",
        "-r",
        help="Fraction of rows held out for testing (default: 0.2)",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
):
    """tableflow: load, shuffle, split and batch tabular datasets.

    Without a subcommand, runs `prepare` using the options given here
    (e.g. `tableflow --format csv --input data.csv --test_ratio 0.3`).
    """
    options = {
        "--format": format,
        "--input": input_path,
        "--target": target,
        "--test_ratio": test_ratio,
    }
    given = [flag for flag, value in options.items() if value is not None]
    if ctx.invoked_subcommand is not None:
        if given:
            typer.secho(
                f"Error: {', '.join(given)} must follow the subcommand "
                f"(tableflow {ctx.invoked_subcommand} {given[0]} ...)",
                fg=typer.colors.RED,
                err=True,
            )
            raise typer.Exit(code=2)
        return

    try:
        config = _build_config(
            input_path=input_path,
            format=format,
            target_col=target,
            test_ratio=test_ratio,
        )
    except TableflowError as e:
        _fail(e)

    _run_prepare(config)


@app.command()
def prepare(
    format: Optional[str] = typer.Option(
        None,
        "--format",
        "-f",
        help="Input format: csv, json or parquet (default: inferred from the file suffix)",
    ),
    input_path: Optional[Path] = typer.Option(
        None,
        "--input",
        "-i",
        help="Path to the input file (default: data/security_dataset.csv)",
    ),
    target: Optional[str] = typer.Option(
        None,
        "--target",
        "-t",
        help="Name of the target column (default: target)",
    ),
    test_ratio: Optional[float] = typer.Option(
        None,
        "--test_ratio",
        "--test-ratio",
        "-r",
        help="Fraction of rows held out for testing (default: 0.2)",
    ),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed for the shuffle"),
    shuffle: Optional[bool] = typer.Option(
        None,
        "--shuffle/--no-shuffle",
        help="Shuffle rows before splitting (default: shuffle)",
    ),
    batch_size: Optional[int] = typer.Option(
        None,
        "--batch-size",
        "-b",
        help="Also iterate the train partition in batches of this size",
    ),
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="JSON or YAML file with pipeline settings; options given here override it",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Verbose logging"),
):
    """
    Load a dataset, shuffle it and split it into train/test partitions.

    Examples:
        # Defaults: data/security_dataset.csv, target column "target", 20% test
        tableflow prepare

        # JSON records, reproducible shuffle
        tableflow prepare --format json --input events.json --seed 42

        # Columnar input, 30% test, report batches of 64
        tableflow prepare -i events.parquet -r 0.3 --batch-size 64
    """
    if verbose:
        logging.getLogger("tableflow").setLevel(logging.DEBUG)

    try:
        config = _build_config(
            config_path,
            input_path=input_path,
            format=format,
            target_col=target,
            test_ratio=test_ratio,
            seed=seed,
            shuffle=shuffle,
            batch_size=batch_size,
        )
    except TableflowError as e:
        _fail(e)

    _run_prepare(config)


@app.command()
def convert(
    input_path: Path = typer.Argument(..., help="File to read"),
    output_path: Path = typer.Argument(..., help="File to write"),
    from_format: Optional[str] = typer.Option(
        None, "--from", help="Input format (default: inferred from INPUT_PATH)"
    ),
    to_format: Optional[str] = typer.Option(
        None, "--to", help="Output format (default: inferred from OUTPUT_PATH)"
    ),
):
    """
    Convert a table between CSV, JSON and Parquet.

    Examples:
        tableflow convert data/security_dataset.csv data/security_dataset.parquet
        tableflow convert events.json events.out --to csv
    """
    try:
        table = load_table(input_path, format=from_format)
        written = save_table(table, output_path, format=to_format)
        src_fmt = DataFormat.parse(from_format) if from_format else infer_format(input_path)
        dst_fmt = DataFormat.parse(to_format) if to_format else infer_format(output_path)
    except TableflowError as e:
        _fail(e)

    typer.secho(
        f"✓ Converted {table.height()} rows: {input_path} ({src_fmt.value}) -> "
        f"{written} ({dst_fmt.value})",
        fg=typer.colors.GREEN,
    )


@app.command()
def inspect(
    input_path: Path = typer.Argument(..., help="File to inspect"),
    format: Optional[str] = typer.Option(
        None, "--format", "-f", help="Input format (default: inferred from the file suffix)"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the report as JSON"),
):
    """Show shape, column types, content hash and missing values of a table file."""
    try:
        table = load_table(input_path, format=format)
        file_meta = get_file_metadata(input_path)
    except TableflowError as e:
        _fail(e)

    missing = generate_missingness_report(table)
    report = {
        "path": file_meta["path"],
        "size_bytes": file_meta["size_bytes"],
        "sha256": file_meta["sha256_hash"],
        "n_rows": table.height(),
        "n_columns": table.width(),
        "dtypes": table.dtypes,
        "table_hash": compute_table_hash(table),
        "total_missing": missing["total_missing"],
        "missing_counts": missing["missing_counts"],
    }

    if as_json:
        typer.echo(json.dumps(report, indent=2))
        return

    typer.echo(f"File: {report['path']} ({report['size_bytes']} bytes)")
    typer.echo(f"  SHA256: {report['sha256']}")
    typer.echo(f"  Rows: {report['n_rows']}")
    typer.echo(f"  Columns: {report['n_columns']}")
    for name, dtype in report["dtypes"].items():
        typer.echo(f"    {name}: {dtype}")
    typer.echo(f"  Table hash: {report['table_hash']}")
    if report["total_missing"]:
        typer.echo(f"  Missing values: {report['total_missing']}")
        for name, count in report["missing_counts"].items():
            typer.echo(f"    {name}: {count}")
    else:
        typer.echo("  Missing values: none")


if __name__ == "__main__":
    app()
