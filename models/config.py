"""Run configuration loaded from config.json and the environment."""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

from dotenv import load_dotenv

from .constants import (
    CITY_CENTRE,
    DEFAULT_MAX_PAGES,
    DEFAULT_ROUTING_RPM_LIMIT,
    ScoringProfileName,
)
from .errors import ConfigError

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent


@dataclass
class ScraperConfig:
    """Validated settings shared by every pipeline component."""

    cache_folder: Path
    output_folder: Path
    routing_api_key: str
    minimum_price: int
    maximum_price: int
    minimum_bedrooms: Optional[int] = None
    minimum_bathrooms: Optional[int] = None

    portal: str = "daft"
    regions: List[str] = field(default_factory=list)
    property_category: str = "houses"
    reference_point: Tuple[float, float] = CITY_CENTRE
    scoring_profile: str = ScoringProfileName.STRICT.value
    max_pages: int = DEFAULT_MAX_PAGES
    delay_page: float = 1.0
    routing_rpm_limit: int = DEFAULT_ROUTING_RPM_LIMIT

    transports_file: Path = PROJECT_ROOT / "data" / "transports.yaml"
    stores_file: Path = PROJECT_ROOT / "data" / "stores.yaml"

    output_filename: str = "daft.json"
    generate_summary: bool = True
    summary_top_n: int = 20

    @property
    def listings_folder(self) -> Path:
        return self.cache_folder / "listings"

    @property
    def transports_cache_folder(self) -> Path:
        return self.cache_folder / "transports"

    @property
    def stores_cache_folder(self) -> Path:
        return self.cache_folder / "stores"

    @property
    def price_midpoint(self) -> float:
        return (self.minimum_price + self.maximum_price) / 2


def _parse_int(env: Mapping[str, str], key: str, required: bool) -> Optional[int]:
    """Read an integer environment variable, rejecting non-numeric values."""
    raw = env.get(key)
    if raw is None or raw.strip() == "":
        if required:
            raise ConfigError(f"Missing required environment variable {key}")
        return None
    try:
        return int(raw.strip())
    except ValueError:
        raise ConfigError(f"{key} must be an integer, got {raw!r}") from None


def _setting_number(section: Mapping[str, Any], key: str, default: Any, cast, label: str):
    """Read a numeric config.json setting, rejecting values that do not convert."""
    raw = section.get(key, default)
    try:
        return cast(raw)
    except (TypeError, ValueError):
        raise ConfigError(f"'{label}' must be a number, got {raw!r}") from None


def _resolve_path(value: str) -> Path:
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = PROJECT_ROOT / path
    return path


def build_config(
    settings: Dict[str, Any], env: Mapping[str, str]
) -> ScraperConfig:
    """
    Merge config.json settings and environment values into a ScraperConfig.

    Args:
        settings: Parsed config.json content
        env: Environment mapping (os.environ after .env loading)

    Raises:
        ConfigError: If a required value is missing or malformed
    """
    api_key = (env.get("OPENROUTESERVICE_API_KEY") or "").strip()
    if not api_key:
        raise ConfigError(
            "Missing required environment variable OPENROUTESERVICE_API_KEY"
        )

    minimum_price = _parse_int(env, "MINIMUM_PRICE", required=True)
    maximum_price = _parse_int(env, "MAXIMUM_PRICE", required=True)
    if minimum_price < 0 or minimum_price > maximum_price:
        raise ConfigError(
            f"Invalid price range: MINIMUM_PRICE={minimum_price}, "
            f"MAXIMUM_PRICE={maximum_price}"
        )

    portal = settings.get("portal", "daft")
    regions = settings.get("regions", [])
    if not isinstance(regions, list) or not all(isinstance(r, str) for r in regions):
        raise ConfigError("'regions' must be a list of region slugs")

    profile = settings.get("scoring_profile", ScoringProfileName.STRICT.value)
    valid_profiles = [p.value for p in ScoringProfileName]
    if profile not in valid_profiles:
        raise ConfigError(
            f"Unknown scoring_profile {profile!r}. Supported: {', '.join(valid_profiles)}"
        )

    reference = settings.get("reference_point")
    if reference is None:
        reference_point = CITY_CENTRE
    else:
        try:
            reference_point = (float(reference["lat"]), float(reference["lng"]))
        except (KeyError, TypeError, ValueError):
            raise ConfigError("'reference_point' needs numeric 'lat' and 'lng'") from None

    rate_config = settings.get("rate_limiting", {})
    rpm_limit = _setting_number(
        rate_config, "routing_rpm_limit", DEFAULT_ROUTING_RPM_LIMIT, int,
        "rate_limiting.routing_rpm_limit",
    )
    if rpm_limit <= 0:
        raise ConfigError("'rate_limiting.routing_rpm_limit' must be positive")

    max_pages = _setting_number(settings, "max_pages", DEFAULT_MAX_PAGES, int, "max_pages")
    if max_pages <= 0:
        raise ConfigError("'max_pages' must be positive")

    delay_page = _setting_number(
        rate_config, "delay_page", 1.0, float, "rate_limiting.delay_page"
    )

    facilities = settings.get("facilities", {})
    output_config = settings.get("output", {})
    summary_top_n = _setting_number(
        output_config, "summary_top_n", 20, int, "output.summary_top_n"
    )

    config = ScraperConfig(
        cache_folder=_resolve_path(env.get("CACHE_FOLDER") or "cache"),
        output_folder=_resolve_path(env.get("OUTPUT_FOLDER") or "~/files"),
        routing_api_key=api_key,
        minimum_price=minimum_price,
        maximum_price=maximum_price,
        minimum_bedrooms=_parse_int(env, "MINIMUM_BEDROOMS", required=False),
        minimum_bathrooms=_parse_int(env, "MINIMUM_BATHROOMS", required=False),
        portal=portal,
        regions=regions,
        property_category=settings.get("property_category", "houses"),
        reference_point=reference_point,
        scoring_profile=profile,
        max_pages=max_pages,
        delay_page=delay_page,
        routing_rpm_limit=rpm_limit,
        transports_file=_resolve_path(facilities.get("transports", "data/transports.yaml")),
        stores_file=_resolve_path(facilities.get("stores", "data/stores.yaml")),
        output_filename=output_config.get("filename", "daft.json"),
        generate_summary=output_config.get("generate_summary", True),
        summary_top_n=summary_top_n,
    )

    logger.debug(f"Loaded configuration: {config}")
    return config


def load_config(config_path: Optional[Path] = None) -> ScraperConfig:
    """Load configuration from config.json and the environment (.env aware)."""
    config_path = config_path or PROJECT_ROOT / "config.json"
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            settings = json.load(f)
    except FileNotFoundError:
        raise ConfigError(f"Configuration file not found: {config_path}") from None
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {config_path}: {e}") from None

    load_dotenv()
    return build_config(settings, os.environ)
