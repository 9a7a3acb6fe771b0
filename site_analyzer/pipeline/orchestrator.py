"""
Scoring pipeline orchestration.

``score_and_match`` runs the deterministic core in a fixed order:

  Step 1 - State code:   ``SiteContext.state_code``, else parsed from the address.
  Step 2 - District:     classify the site into an archetype.
  Step 3 - Feasibility:  overall 0-10 score with four sub-scores, plus the
                         six-factor variant when environmental or comp data exists.
  Step 4 - Suitability:  rank every eligible category (traffic required).
  Step 5 - Brands:       concrete brand recommendations (traffic required).
  Step 6 - Retailers:    match the retailer dataset against the site facts.
  Step 7 - Grade:        A-F report card, optionally for one business type.
  Step 8 - Lot tenants:  reference tenants whose lot range covers the site
                         (lot size and lot reference required).

No step raises on missing site data; absent traffic yields empty
suitability and recommendation lists, absent demographics or lot size are
threaded through as "unknown". An unknown ``business_type`` is a caller
error and raises ``ValueError``.

``AnalysisPipeline`` owns the reference data for a process: it loads the
category catalog, retailer dataset and tenant lot reference once and reuses
them for every ``analyze()`` call. None is mutated, so a pipeline may be
shared across threads.
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional

from site_analyzer.analysis.district import classify_site
from site_analyzer.analysis.feasibility import (
    calculate_extended_feasibility,
    calculate_feasibility,
)
from site_analyzer.analysis.site_grading import grade_site
from site_analyzer.catalog.categories import load_category_catalog
from site_analyzer.catalog.lot_reference import LotReference, load_lot_reference
from site_analyzer.catalog.retailer_loader import RetailerDataset, load_retailer_dataset
from site_analyzer.config import AppConfig, resolve_data_path
from site_analyzer.ingestion.site_parsing import extract_state_code
from site_analyzer.models.requirements import CategoryRequirement
from site_analyzer.models.results import SiteAnalysis
from site_analyzer.models.site import SiteContext
from site_analyzer.recommendations.brands import generate_recommendations
from site_analyzer.recommendations.suitability import rank_categories
from site_analyzer.retailers.matcher import RetailerSiteFacts, match_retailers

logger = logging.getLogger(__name__)


def resolve_state_code(site: SiteContext) -> Optional[str]:
    return site.state_code or extract_state_code(site.address)


def score_and_match(
    site_context: SiteContext,
    category_catalog: Mapping[str, CategoryRequirement],
    retailer_dataset: RetailerDataset,
    config: Optional[AppConfig] = None,
    *,
    lot_reference: Optional[LotReference] = None,
    business_type: Optional[str] = None,
) -> SiteAnalysis:
    """Run the full scoring pipeline for one site.

    Args:
        site_context:     Everything known about the site.
        category_catalog: Id-indexed category catalog.
        retailer_dataset: Retailer requirement dataset.
        config:           Application config; only list sizes and the matcher
                          cut-off are read. Defaults when ``None``.
        lot_reference:    Tenant lot reference; ``lot_tenants`` stays empty
                          without it.
        business_type:    Grade the site for this business type id
                          (see ``catalog.business_types``); ``None`` grades
                          it as general commercial.

    Returns:
        A frozen ``SiteAnalysis``. Identical inputs give identical output.

    Raises:
        ValueError: ``business_type`` is not a known type id.
    """
    cfg = config or AppConfig()
    site = site_context

    site_grade = grade_site(site, business_type)
    state_code = resolve_state_code(site)
    district = classify_site(site)
    feasibility = calculate_feasibility(site.traffic, site.demographics, site.nearby_businesses)

    extended = None
    if site.environmental is not None or site.market_comps:
        extended = calculate_extended_feasibility(
            site.traffic,
            site.demographics,
            site.nearby_businesses,
            site.environmental,
            site.market_comps,
        )

    suitability = []
    recommendations: list[str] = []
    vpd = site.vpd
    if vpd is not None:
        suitability = rank_categories(
            vpd=vpd,
            nearby_businesses=site.nearby_businesses,
            demographics=site.demographics,
            lot_size_acres=site.lot_size_acres,
            district=district,
            catalog=category_catalog,
        )
        recommendations = generate_recommendations(
            vpd=vpd,
            nearby_businesses=site.nearby_businesses,
            demographics=site.demographics,
            lot_size_acres=site.lot_size_acres,
            district=district,
            catalog=category_catalog,
            config=cfg.recommendations,
        )

    retailer_matches = match_retailers(
        retailer_dataset,
        RetailerSiteFacts.from_site(site, state_code),
        cfg.matcher,
    )

    lot_tenants = []
    if lot_reference is not None and site.lot_size_acres is not None:
        limit = cfg.recommendations.lot_tenant_limit
        lot_tenants = lot_reference.matching_tenants(site.lot_size_acres)[:limit]

    logger.info(
        "Analyzed %r: district=%s feasibility=%d (%s) grade=%s categories=%d "
        "recommendations=%d retailer_matches=%d/%d lot_tenants=%d",
        site.address,
        district.type,
        feasibility.overall,
        feasibility.rating,
        site_grade.overall_score,
        len(suitability),
        len(recommendations),
        len(retailer_matches.matches),
        retailer_matches.total_matches,
        len(lot_tenants),
    )

    return SiteAnalysis(
        address=site.address,
        state_code=state_code,
        lot_size_acres=site.lot_size_acres,
        district=district,
        feasibility=feasibility,
        suitability=suitability,
        recommendations=recommendations,
        retailer_matches=retailer_matches,
        site_grade=site_grade,
        extended_feasibility=extended,
        lot_tenants=lot_tenants,
    )


class AnalysisPipeline:
    """Loads reference data once and analyzes any number of sites.

    Args:
        config:           Application configuration.
        retailer_dataset: Pre-loaded dataset; loaded from
                          ``config.data.retailers_file`` when ``None``.
        lot_reference:    Pre-loaded tenant lot reference; loaded from
                          ``config.data.lot_reference_file`` when ``None``.
    """

    def __init__(
        self,
        config: AppConfig,
        retailer_dataset: Optional[RetailerDataset] = None,
        lot_reference: Optional[LotReference] = None,
    ) -> None:
        self.config = config
        self.catalog = load_category_catalog()
        if retailer_dataset is None:
            retailer_dataset = load_retailer_dataset(
                resolve_data_path(config.data.retailers_file)
            )
        if lot_reference is None:
            lot_reference = load_lot_reference(
                resolve_data_path(config.data.lot_reference_file)
            )
        self.retailers = retailer_dataset
        self.lot_reference = lot_reference

    def analyze(
        self,
        site_context: SiteContext,
        business_type: Optional[str] = None,
    ) -> SiteAnalysis:
        return score_and_match(
            site_context,
            self.catalog,
            self.retailers,
            self.config,
            lot_reference=self.lot_reference,
            business_type=business_type,
        )
