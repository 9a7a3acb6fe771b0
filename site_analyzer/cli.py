"""
Site Analyzer: CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Validate inputs.
  4. Execute action (analysis, data validation, catalog listing).
  5. Report result to stdout.

Install and run::

    pip install -e .
    site-analyzer --help
    site-analyzer validate-config
    site-analyzer validate-data
    site-analyzer analyze examples/site.json
    site-analyzer analyze examples/site.json --json --output data/outputs/site.json
    site-analyzer analyze examples/site.json --business-type qsr --csv data/outputs/matches.csv
    site-analyzer lot-tenants 1.2 --tenant "Chick-fil-A"
    site-analyzer business-fit 1.0 --corner --stacking 10
    site-analyzer list-business-types
    site-analyzer list-categories --district highway_corridor
    site-analyzer parse-lot-size "Approximately 1.2 - 1.5 acres"
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="site-analyzer",
    help="Commercial site analyzer: feasibility, category ranking and retailer matching.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from site_analyzer.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except ValueError as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from site_analyzer.utils.logging import configure_logging
    configure_logging(config.logging)


def _load_retailers_or_exit(config):
    from site_analyzer.catalog.retailer_loader import load_retailer_dataset
    from site_analyzer.config import resolve_data_path

    try:
        return load_retailer_dataset(resolve_data_path(config.data.retailers_file))
    except (FileNotFoundError, ValueError) as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)


def _load_lot_reference_or_exit(config):
    from site_analyzer.catalog.lot_reference import load_lot_reference
    from site_analyzer.config import resolve_data_path

    try:
        return load_lot_reference(resolve_data_path(config.data.lot_reference_file))
    except (FileNotFoundError, ValueError) as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)


def _load_business_profiles_or_exit(config):
    from site_analyzer.catalog.business_profiles import load_business_profiles
    from site_analyzer.config import resolve_data_path

    try:
        return load_business_profiles(resolve_data_path(config.data.business_profiles_file))
    except (FileNotFoundError, ValueError) as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("analyze")
def analyze(
    site_json: str = typer.Argument(
        ...,
        help="Path to a site JSON file (SiteContext fields).",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
    business_type: Optional[str] = typer.Option(
        None,
        "--business-type",
        "-b",
        help="Grade the site for this business type (see list-business-types).",
    ),
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the full analysis as JSON to this path.",
    ),
    csv_path: Optional[str] = typer.Option(
        None,
        "--csv",
        help="Write the ranked retailer matches as CSV to this path.",
    ),
    categories_csv: Optional[str] = typer.Option(
        None,
        "--categories-csv",
        help="Write the category suitability ranking as CSV to this path.",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the analysis as JSON instead of the text report.",
    ),
) -> None:
    """Score one site: feasibility, grade, categories, brands, retailers and tenants."""
    from site_analyzer.ingestion.site_parsing import load_site_context
    from site_analyzer.pipeline.orchestrator import AnalysisPipeline
    from site_analyzer.reporting.export import (
        export_analysis_json,
        export_retailer_matches_csv,
        export_suitability_csv,
    )
    from site_analyzer.reporting.formatters import format_analysis_report

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    try:
        site = load_site_context(Path(site_json))
    except (FileNotFoundError, ValueError) as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    pipeline = AnalysisPipeline(
        config,
        retailer_dataset=_load_retailers_or_exit(config),
        lot_reference=_load_lot_reference_or_exit(config),
    )
    try:
        analysis = pipeline.analyze(site, business_type=business_type)
    except ValueError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(analysis.model_dump_json(indent=2))
    else:
        typer.echo(format_analysis_report(analysis))

    # Status lines go to stderr under --json so stdout stays parseable.
    if output:
        written = export_analysis_json(analysis, Path(output))
        typer.echo(f"[OK] Analysis written to {written}", err=as_json)
    if csv_path:
        written = export_retailer_matches_csv(analysis, Path(csv_path))
        typer.echo(f"[OK] Retailer matches written to {written}", err=as_json)
    if categories_csv:
        written = export_suitability_csv(analysis, Path(categories_csv))
        typer.echo(f"[OK] Category ranking written to {written}", err=as_json)


@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Retailers file:      {config.data.retailers_file}")
    typer.echo(f"  Lot reference file:  {config.data.lot_reference_file}")
    typer.echo(f"  Profiles file:       {config.data.business_profiles_file}")
    typer.echo(f"  Output dir:          {config.data.output_dir}")
    typer.echo(f"  Max matches:         {config.matcher.max_results}")
    typer.echo(f"  Min match score:     {config.matcher.min_match_score}")
    typer.echo(f"  Max recommendations: {config.recommendations.max_recommendations}")
    typer.echo(f"  Log level:           {config.logging.level}")
    typer.echo(f"  Debug mode:          {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("validate-data")
def validate_data(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Validate the category catalog, retailer dataset, lot reference and
    business profiles.

    Exits with code 1 if any of them fails validation.
    """
    from site_analyzer.catalog.categories import load_category_catalog

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    try:
        catalog = load_category_catalog()
    except ValueError as exc:
        typer.echo(f"[ERROR] Category catalog invalid: {exc}", err=True)
        raise typer.Exit(code=1)

    dataset = _load_retailers_or_exit(config)
    expanding = sum(1 for _ in dataset.expanding())
    lot_reference = _load_lot_reference_or_exit(config)
    profiles = _load_business_profiles_or_exit(config)

    typer.echo(f"  Categories:          {len(catalog)}")
    typer.echo(f"  Retailers:           {len(dataset)}")
    typer.echo(f"  Actively expanding:  {expanding}")
    typer.echo(f"  Lot reference:       {len(lot_reference)} tenants")
    typer.echo(f"  Business profiles:   {len(profiles)}")
    typer.echo("[OK] Reference data valid.")


@app.command("list-categories")
def list_categories(
    district: Optional[str] = typer.Option(
        None,
        "--district",
        "-d",
        help="Hide categories excluded in this district type (e.g. historic_downtown).",
    ),
) -> None:
    """List the business category catalog."""
    from site_analyzer.analysis.district import DISTRICT_PROFILES
    from site_analyzer.catalog.categories import load_category_catalog
    from site_analyzer.reporting.formatters import format_category_list
    from site_analyzer.taxonomy.site_taxonomy import DistrictType

    catalog = load_category_catalog()

    if district:
        try:
            profile = DISTRICT_PROFILES[DistrictType(district)]
        except ValueError:
            valid = ", ".join(t.value for t in DistrictType)
            typer.echo(f"[ERROR] Unknown district '{district}'. Valid: {valid}", err=True)
            raise typer.Exit(code=1)
        catalog = {cid: c for cid, c in catalog.items() if not profile.excludes(cid)}
        typer.echo(f"District: {profile.type} ({profile.description})")

    typer.echo(format_category_list(catalog))


@app.command("parse-lot-size")
def parse_lot_size_cmd(
    text: str = typer.Argument(..., help="Free-text lot size, e.g. '1.2 - 1.5 acres'."),
) -> None:
    """Parse a free-text lot-size estimate into acres."""
    from site_analyzer.ingestion.site_parsing import parse_lot_size

    acres = parse_lot_size(text)
    if acres is None:
        typer.echo("Lot size: unknown")
        raise typer.Exit(code=1)
    typer.echo(f"Lot size: {acres:.2f} acres")


@app.command("list-business-types")
def list_business_types() -> None:
    """List the business types accepted by ``analyze --business-type``."""
    from site_analyzer.catalog.business_types import BUSINESS_TYPES
    from site_analyzer.reporting.formatters import format_business_types

    typer.echo(format_business_types(BUSINESS_TYPES))


@app.command("lot-tenants")
def lot_tenants(
    acres: float = typer.Argument(..., help="Lot size in acres."),
    tenant: Optional[str] = typer.Option(
        None,
        "--tenant",
        "-t",
        help="Check whether this named tenant fits instead of listing all.",
    ),
    category: Optional[str] = typer.Option(
        None,
        "--category",
        help="Only list tenants in this lot-reference category.",
    ),
    limit: int = typer.Option(20, "--limit", "-n", min=1, help="Maximum tenants listed."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Named tenants whose typical lot range covers ACRES."""
    from site_analyzer.reporting.formatters import format_lot_tenants, format_tenant_fit

    if acres <= 0:
        typer.echo("[ERROR] Lot size must be positive.", err=True)
        raise typer.Exit(code=1)

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    reference = _load_lot_reference_or_exit(config)

    if tenant:
        fit = reference.tenant_fit(tenant, acres)
        typer.echo(format_tenant_fit(tenant, acres, fit))
        if fit.tenant is None:
            raise typer.Exit(code=1)
        return

    matches = reference.matching_tenants(acres)
    if category:
        if category not in reference.categories():
            valid = ", ".join(reference.categories())
            typer.echo(f"[ERROR] Unknown category '{category}'. Valid: {valid}", err=True)
            raise typer.Exit(code=1)
        matches = [t for t in matches if t.category == category]

    typer.echo(f"Tenants for {acres:g} acres ({len(matches)} match):")
    typer.echo(format_lot_tenants(matches[:limit]))


@app.command("business-fit")
def business_fit(
    acres: float = typer.Argument(..., help="Lot size in acres."),
    sqft: Optional[int] = typer.Option(None, "--sqft", help="Available building square feet."),
    shopping_center: bool = typer.Option(
        False, "--shopping-center", help="Site is inside a shopping center."
    ),
    drive_thru: bool = typer.Option(
        False, "--drive-thru", help="Site can host a drive-through."
    ),
    new_construction: bool = typer.Option(
        False, "--new-construction", help="Ground-up construction rather than a conversion."
    ),
    highway: bool = typer.Option(False, "--highway", help="Site has highway visibility."),
    corner: bool = typer.Option(False, "--corner", help="Corner lot."),
    stacking: Optional[int] = typer.Option(
        None,
        "--stacking",
        min=0,
        help="Drive-through stacking spaces; decides drive-through potential from the lot.",
    ),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Brands from the business profiles that would plausibly take this site."""
    from site_analyzer.catalog.business_profiles import assess_drive_through
    from site_analyzer.reporting.formatters import format_business_profiles

    if acres <= 0:
        typer.echo("[ERROR] Lot size must be positive.", err=True)
        raise typer.Exit(code=1)

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    profiles = _load_business_profiles_or_exit(config)

    if stacking is not None:
        assessment = assess_drive_through(acres, corner, stacking)
        typer.echo(f"Drive-through: {'feasible' if assessment.feasible else 'not feasible'}"
                   f" ({assessment.notes})")
        drive_thru = assessment.feasible

    picks = profiles.recommend_for_site(
        acres,
        sqft,
        is_shopping_center=shopping_center,
        has_drive_through_potential=drive_thru,
        is_new_construction=new_construction,
        has_highway_visibility=highway,
        has_corner_lot=corner,
    )
    typer.echo(format_business_profiles(picks))
