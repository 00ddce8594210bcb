"""High level orchestration of the NASA explorer endpoints.

Each public method validates its parameters, calls the matching upstream
through a :class:`~fetch.sources.NasaClient` and reshapes the JSON the way the
dashboard consumes it.  Bad input raises :class:`ValidationError` before any
network traffic; upstream failures surface as
:class:`~fetch.sources.UpstreamError`.  :func:`error_payload` turns either
into the ``{"error", "timestamp"}`` body the dashboard renders.
"""
from __future__ import annotations

import datetime as dt
import html
import re
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple
from urllib.parse import quote

from fetch.cache import ResponseCache, make_cache_key
from fetch.sources import NasaClient, UpstreamError, build_client
from nasa_explorer.config import AppConfig, load_config
from nasa_explorer.core import OrbitalElementSet, ParseError, derive, parse_tle
from nasa_explorer.logging import get_logger, log_context
from nasa_explorer.stats import analyze_neo_feed, flatten_neo_feed, summarize_eonet_events, summarize_osdr_studies

_LOGGER = get_logger("fetch.service")

APOD_FIRST_DATE = dt.date(1995, 6, 16)
NEO_FEED_DEFAULT_DAYS = 7
EONET_MAX_LIMIT = 500
EONET_MAX_DAYS = 365
EONET_STATUSES = ("open", "closed", "all")
EPIC_COLLECTIONS = ("natural", "enhanced")
MARS_ROVERS = ("curiosity", "opportunity", "spirit", "perseverance")
MARS_MAX_SOL = 10000
MARS_MAX_PER_PAGE = 100
TLE_MAX_PAGE_SIZE = 1000
TLE_MAX_BATCH = 100
TLE_CATEGORIES = (
    "stations",
    "visual",
    "active-geosynchronous",
    "analyst",
    "weather",
    "noaa",
    "goes",
    "resource",
    "cubesat",
    "other",
)
ANALYSIS_TYPES = ("basic", "detailed")
OSDR_DATASET_PATH = "/gh4g-9sfh.json"
TECH_TRANSFER_CATEGORIES = {"patents": "patent", "software": "software", "spinoffs": "spinoff"}
MEDIA_TYPES = ("image", "video", "audio")
MEDIA_MAX_PAGE_SIZE = 100
MEDIA_FILTERS = (
    "center",
    "description",
    "keywords",
    "location",
    "nasa_id",
    "photographer",
    "secondary_creator",
    "title",
    "year_start",
    "year_end",
)
MEDIA_ASSET_KINDS = ("asset", "metadata", "captions")

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TAG_RE = re.compile(r"<[^>]*>")


class ValidationError(ValueError):
    """Raised when a caller supplies an invalid query parameter."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.details = dict(details or {})


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


def error_payload(exc: BaseException, clock: Optional[Callable[[], dt.datetime]] = None) -> Dict[str, Any]:
    """Render ``exc`` as the ``{"error": ..., "timestamp": ...}`` failure body."""

    now = (clock or _utcnow)()
    payload: Dict[str, Any] = {"error": str(exc) or exc.__class__.__name__, "timestamp": now.isoformat()}
    if isinstance(exc, ValidationError) and exc.details:
        payload["details"] = exc.details
    return payload


def status_for(exc: BaseException) -> int:
    """HTTP-equivalent status for ``exc``."""

    if isinstance(exc, ValueError):
        return 400
    if isinstance(exc, UpstreamError) and exc.status:
        return exc.status
    return 500


def ensure_https(url: Optional[str]) -> Optional[str]:
    if not url:
        return url
    return re.sub(r"^http:", "https:", url)


def parse_date(value: str, label: str = "date") -> dt.date:
    """Parse a strict ``YYYY-MM-DD`` string."""

    if not isinstance(value, str) or not _DATE_RE.match(value):
        raise ValidationError(
            f"Invalid {label} format. Use YYYY-MM-DD", details={label: value, "example": "2023-12-25"}
        )
    try:
        return dt.date.fromisoformat(value)
    except ValueError as exc:
        raise ValidationError(
            f"Invalid {label} format. Use YYYY-MM-DD", details={label: value, "example": "2023-12-25"}
        ) from exc


def _to_int(value: Any, label: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"Invalid {label} parameter", details={label: value})
    try:
        return int(str(value).strip())
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Invalid {label} parameter", details={label: value}) from exc


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return bool(value)


def enrich_event(event: Mapping[str, Any]) -> Dict[str, Any]:
    """Add ``isActive``, ``latestGeometry`` and ``totalGeometries`` to an EONET event."""

    geometry = list(event.get("geometry") or [])
    enriched = dict(event)
    enriched["isActive"] = event.get("closed") is None
    enriched["latestGeometry"] = geometry[-1] if geometry else None
    enriched["totalGeometries"] = len(geometry)
    return enriched


def strip_markup(value: Any) -> Any:
    """Remove HTML tags and unescape entities in every string inside ``value``."""

    if isinstance(value, str):
        return html.unescape(_TAG_RE.sub("", value)).strip()
    if isinstance(value, Mapping):
        return {key: strip_markup(item) for key, item in value.items()}
    if isinstance(value, list):
        return [strip_markup(item) for item in value]
    return value


def unwrap_results(data: Any) -> List[Any]:
    """Find the result rows in a Tech Transfer payload.

    Tries ``results``, then ``data.results``, then ``data``, then a bare list;
    anything else yields no rows.
    """

    if isinstance(data, Mapping):
        inner = data.get("data")
        if data.get("results"):
            rows = data["results"]
        elif isinstance(inner, Mapping) and inner.get("results"):
            rows = inner["results"]
        else:
            rows = inner
    else:
        rows = data
    return list(rows) if isinstance(rows, list) else []


class ExplorerService:
    """Coordinates upstream clients, the APOD cache and response shaping."""

    def __init__(
        self,
        nasa: Optional[NasaClient] = None,
        eonet: Optional[NasaClient] = None,
        tle: Optional[NasaClient] = None,
        data: Optional[NasaClient] = None,
        images: Optional[NasaClient] = None,
        cache: Optional[ResponseCache] = None,
        clock: Optional[Callable[[], dt.datetime]] = None,
        config: Optional[AppConfig] = None,
    ) -> None:
        self.config = config or load_config()
        settings = self.config.client
        self.nasa = nasa or build_client("nasa", settings)
        self.eonet = eonet or build_client("eonet", settings)
        self.tle = tle or build_client("tle", settings)
        self.data = data or build_client("data", settings)
        self.images = images or build_client("images", settings)
        self._clock = clock or _utcnow
        self.cache = cache or ResponseCache(
            ttl=dt.timedelta(seconds=self.config.cache.ttl),
            max_size=self.config.cache.max_size,
            clock=self._clock,
        )

    def _timestamp(self) -> str:
        return self._clock().isoformat()

    def _today(self) -> dt.date:
        return self._clock().date()

    def error_payload(self, exc: BaseException) -> Dict[str, Any]:
        return error_payload(exc, clock=self._clock)

    # ------------------------------------------------------------------ APOD

    def validate_apod_date(self, value: Optional[str]) -> Optional[dt.date]:
        if value is None or value == "":
            return None
        day = parse_date(value, "date")
        if day < APOD_FIRST_DATE or day > self._today():
            raise ValidationError(
                "Date out of range. APOD is available from June 16, 1995 to present.",
                details={"date": value, "minDate": APOD_FIRST_DATE.isoformat()},
            )
        return day

    def apod(self, date: Optional[str] = None, hd: Any = True) -> Dict[str, Any]:
        """Astronomy Picture of the Day, served from cache within the TTL."""

        day = self.validate_apod_date(date)
        params: Dict[str, Any] = {"hd": _to_bool(hd)}
        if day is not None:
            params["date"] = day.isoformat()
        key = make_cache_key("apod", params)

        cached = self.cache.get(key)
        if cached is not None:
            _LOGGER.debug("APOD cache hit", extra={"cache_key": key})
            return {**cached.value, "cached": True, "cached_at": cached.stored_at.isoformat()}

        with log_context(endpoint="apod", date=params.get("date")):
            raw = self.nasa.get_json("/planetary/apod", params)
        if not isinstance(raw, Mapping):
            raise UpstreamError("Invalid response from NASA API", status=502, endpoint="/planetary/apod")
        missing = [field for field in ("title", "date", "explanation", "url") if not raw.get(field)]
        if missing:
            raise UpstreamError(
                f"Missing required fields in NASA response: {', '.join(missing)}",
                status=502,
                endpoint="/planetary/apod",
            )

        result: Dict[str, Any] = {
            "title": raw["title"],
            "explanation": raw["explanation"],
            "date": raw["date"],
            "url": ensure_https(raw["url"]),
            "media_type": raw.get("media_type") or "image",
            "service": "NASA APOD API",
            "fetched_at": self._timestamp(),
        }
        if raw.get("hdurl"):
            result["hdurl"] = ensure_https(raw["hdurl"])
        if raw.get("copyright"):
            result["copyright"] = raw["copyright"]
        if raw.get("service_version"):
            result["service_version"] = raw["service_version"]
        if raw.get("media_type") == "video" and raw.get("thumbnail_url"):
            result["thumbnail_url"] = ensure_https(raw["thumbnail_url"])

        self.cache.set(key, result)
        return dict(result)

    # ----------------------------------------------------------------- NeoWs

    def _date_range(self, start_date: Optional[str], end_date: Optional[str]) -> Dict[str, str]:
        start = parse_date(start_date, "start_date") if start_date else self._today()
        end = (
            parse_date(end_date, "end_date")
            if end_date
            else start + dt.timedelta(days=NEO_FEED_DEFAULT_DAYS)
        )
        if end < start:
            raise ValidationError(
                "end_date must not be before start_date",
                details={"start_date": start.isoformat(), "end_date": end.isoformat()},
            )
        return {"start": start.isoformat(), "end": end.isoformat()}

    def neo_feed(self, start_date: Optional[str] = None, end_date: Optional[str] = None) -> Dict[str, Any]:
        date_range = self._date_range(start_date, end_date)
        with log_context(endpoint="neo_feed"):
            data = self.nasa.get_json(
                "/neo/rest/v1/feed",
                {"start_date": date_range["start"], "end_date": date_range["end"]},
            )
        return {
            **data,
            "metadata": {
                "fetched_at": self._timestamp(),
                "total_objects": len(flatten_neo_feed(data.get("near_earth_objects") or {})),
                "date_range": date_range,
            },
        }

    def neo_lookup(self, asteroid_id: Any) -> Dict[str, Any]:
        asteroid = str(asteroid_id or "").strip()
        if not asteroid:
            raise ValidationError("Asteroid ID is required")
        with log_context(endpoint="neo_lookup", asteroid_id=asteroid):
            return self.nasa.get_json(f"/neo/rest/v1/neo/{asteroid}")

    def neo_browse(self, page: Any = 0, size: Any = 20) -> Dict[str, Any]:
        page_num = _to_int(page, "page")
        if page_num < 0:
            raise ValidationError("Invalid page parameter", details={"page": page})
        size_num = _to_int(size, "size")
        if not 1 <= size_num <= 100:
            raise ValidationError("Invalid size parameter (1-100)", details={"size": size})
        with log_context(endpoint="neo_browse"):
            return self.nasa.get_json("/neo/rest/v1/neo/browse", {"page": page_num, "size": size_num})

    def neo_analyze(
        self, start_date: Optional[str], end_date: Optional[str], analysis_type: str = "basic"
    ) -> Dict[str, Any]:
        """Fetch the feed for an explicit date range and summarise it."""

        if not start_date or not end_date:
            raise ValidationError("Date range with start and end dates required")
        if analysis_type not in ANALYSIS_TYPES:
            raise ValidationError(
                f"Invalid analysis_type. Valid options: {', '.join(ANALYSIS_TYPES)}",
                details={"analysis_type": analysis_type},
            )
        date_range = self._date_range(start_date, end_date)
        with log_context(endpoint="neo_analyze", analysis_type=analysis_type):
            feed = self.nasa.get_json(
                "/neo/rest/v1/feed",
                {"start_date": date_range["start"], "end_date": date_range["end"]},
            )
        analysis = analyze_neo_feed(feed, analysis_type)
        return {
            "analysis": analysis,
            "metadata": {
                "analyzed_at": self._timestamp(),
                "date_range": date_range,
                "analysis_type": analysis_type,
                "total_objects_analyzed": analysis["total_count"],
            },
        }

    # ----------------------------------------------------------------- EONET

    def eonet_events(
        self,
        status: str = "all",
        limit: Any = 100,
        days: Any = 20,
        source: Optional[str] = None,
        category: Optional[str] = None,
    ) -> Dict[str, Any]:
        if status not in EONET_STATUSES:
            raise ValidationError(
                f"Invalid status. Valid options: {', '.join(EONET_STATUSES)}", details={"status": status}
            )
        params: Dict[str, Any] = {
            "status": None if status == "all" else status,
            "limit": min(max(_to_int(limit, "limit"), 1), EONET_MAX_LIMIT),
            "days": min(max(_to_int(days, "days"), 1), EONET_MAX_DAYS),
            "source": source or None,
        }
        if category and category.strip() and category.strip() not in ("all", "undefined"):
            params["category"] = category.strip()
        with log_context(endpoint="eonet_events"):
            data = self.eonet.get_json("/events", params)
        return {**data, "events": [enrich_event(e) for e in data.get("events") or []]}

    def eonet_stats(self, days: Any = 30) -> Dict[str, Any]:
        window = min(max(_to_int(days, "days"), 1), EONET_MAX_DAYS)
        with log_context(endpoint="eonet_stats"):
            data = self.eonet.get_json("/events", {"days": window, "limit": EONET_MAX_LIMIT})
        summary = summarize_eonet_events(data.get("events") or [])
        summary["days"] = window
        summary["generated_at"] = self._timestamp()
        return summary

    # ----------------------------------------------------------------- EPIC

    def epic_images(self, collection: str = "natural", date: Optional[str] = None) -> List[Dict[str, Any]]:
        if collection not in EPIC_COLLECTIONS:
            raise ValidationError(
                'Collection must be "natural" or "enhanced"', details={"collection": collection}
            )
        path = f"/EPIC/api/{collection}/images"
        if date:
            path = f"/EPIC/api/{collection}/date/{parse_date(date).isoformat()}"
        with log_context(endpoint="epic", collection=collection):
            return self.nasa.get_json(path)

    # ------------------------------------------------------------------ Mars

    def mars_photos(
        self,
        rover: str = "curiosity",
        sol: Any = None,
        earth_date: Optional[str] = None,
        camera: Optional[str] = None,
        page: Any = 1,
        per_page: Any = 25,
    ) -> Dict[str, Any]:
        rover_name = (rover or "").lower()
        if rover_name not in MARS_ROVERS:
            raise ValidationError(
                f"Invalid rover name. Valid options: {', '.join(MARS_ROVERS)}", details={"rover": rover}
            )
        page_num = _to_int(page, "page")
        if page_num < 1:
            raise ValidationError("Invalid page parameter", details={"page": page})
        per_page_num = min(_to_int(per_page, "per_page"), MARS_MAX_PER_PAGE)
        if per_page_num < 1:
            raise ValidationError("Invalid per_page parameter", details={"per_page": per_page})

        params: Dict[str, Any] = {"page": page_num, "per_page": per_page_num}
        if earth_date:
            params["earth_date"] = parse_date(earth_date, "earth_date").isoformat()
        elif sol is not None and sol != "":
            sol_num = _to_int(sol, "sol")
            if sol_num < 0:
                raise ValidationError("Invalid sol value. Must be a non-negative integer.", details={"sol": sol})
            if sol_num > MARS_MAX_SOL:
                raise ValidationError("Sol value too large. Please use a reasonable sol value.", details={"sol": sol})
            params["sol"] = sol_num
        else:
            params["sol"] = 1000 if rover_name == "curiosity" else 100
        if camera:
            params["camera"] = camera.lower()

        with log_context(endpoint="mars_photos", rover=rover_name):
            data = self.nasa.get_json(f"/mars-photos/api/v1/rovers/{rover_name}/photos", params)
        photos = []
        for photo in data.get("photos") or []:
            photos.append(
                {
                    **photo,
                    "full_name": (photo.get("camera") or {}).get("full_name") or "Unknown Camera",
                    "rover_name": (photo.get("rover") or {}).get("name") or rover_name,
                    "img_src": ensure_https(photo.get("img_src")),
                }
            )
        return {
            "photos": photos,
            "pagination": {
                "current_page": page_num,
                "per_page": per_page_num,
                "total_photos": len(photos),
                "has_more": len(photos) == per_page_num,
            },
            "filters": {
                "rover": rover_name,
                "earth_date": params.get("earth_date"),
                "sol": params.get("sol"),
                "camera": params.get("camera"),
            },
            "fetched_at": self._timestamp(),
        }

    # ------------------------------------------------------------------ OSDR

    def osdr_studies(self, **params: Any) -> List[Dict[str, Any]]:
        with log_context(endpoint="osdr"):
            data = self.data.get_json(OSDR_DATASET_PATH, params)
        if not isinstance(data, list):
            raise UpstreamError("Invalid response from NASA data portal", status=502, endpoint=OSDR_DATASET_PATH)
        return data

    def osdr_stats(self, **params: Any) -> Dict[str, Any]:
        return summarize_osdr_studies(self.osdr_studies(**params))

    # ------------------------------------------------------- Tech Transfer

    def tech_transfer(self, category: str = "patents", search: Optional[str] = None) -> Dict[str, Any]:
        """Patents, software or spinoffs from the Tech Transfer catalogue.

        HTML markup in the upstream rows is stripped before the rows are
        returned.
        """

        lowered = (category or "").strip().lower()
        singular = TECH_TRANSFER_CATEGORIES.get(lowered)
        if singular is None:
            raise ValidationError(
                f"Invalid category. Valid options: {', '.join(TECH_TRANSFER_CATEGORIES)}",
                details={"category": category},
            )
        term = (search or "").strip()
        params: Dict[str, Any] = {singular: term} if term else {}
        with log_context(endpoint="tech_transfer", category=lowered):
            data = self.nasa.get_json(f"/techtransfer/{singular}/", params)
        results = unwrap_results(strip_markup(data))
        response: Dict[str, Any] = {
            "results": results,
            "count": len(results),
            "category": lowered,
            "fetched_at": self._timestamp(),
        }
        if term:
            response["search"] = term
        return response

    # --------------------------------------------------------- Media Library

    def media_search(
        self,
        q: Optional[str] = None,
        media_type: Optional[str] = "image",
        page: Any = 1,
        page_size: Any = MEDIA_MAX_PAGE_SIZE,
        **filters: Any,
    ) -> Dict[str, Any]:
        """Search the NASA Image and Video Library.

        ``filters`` accepts the library's other search fields (``center``,
        ``year_start``, ``photographer``, ...); at least one of ``q`` or a
        filter must be given.
        """

        unknown = sorted(set(filters) - set(MEDIA_FILTERS))
        if unknown:
            raise ValidationError(
                f"Unknown media search filter: {', '.join(unknown)}", details={"filters": unknown}
            )
        types = [item.strip().lower() for item in (media_type or "").split(",") if item.strip()]
        invalid = [item for item in types if item not in MEDIA_TYPES]
        if invalid:
            raise ValidationError(
                f"Invalid media_type. Valid options: {', '.join(MEDIA_TYPES)}", details={"media_type": media_type}
            )
        params: Dict[str, Any] = {key: value for key, value in filters.items() if value not in (None, "")}
        term = (q or "").strip()
        if term:
            params["q"] = term
        if not params:
            raise ValidationError("A search term or at least one filter is required")
        page_num = _to_int(page, "page")
        if page_num < 1:
            raise ValidationError("Invalid page parameter", details={"page": page})
        size = min(_to_int(page_size, "page_size"), MEDIA_MAX_PAGE_SIZE)
        if size < 1:
            raise ValidationError("Invalid page_size parameter", details={"page_size": page_size})
        params.update({"media_type": ",".join(types) or None, "page": page_num, "page_size": size})

        with log_context(endpoint="media_search"):
            data = self.images.get_json("/search", params)
        if not isinstance(data, Mapping):
            raise UpstreamError("Invalid response from NASA media library", status=502, endpoint="/search")
        collection = data.get("collection") or {}
        items = list(collection.get("items") or [])
        return {
            **data,
            "metadata": {
                "total_hits": (collection.get("metadata") or {}).get("total_hits", len(items)),
                "returned": len(items),
                "page": page_num,
                "page_size": size,
                "fetched_at": self._timestamp(),
            },
        }

    def media_asset(self, nasa_id: Any, kind: str = "asset") -> Dict[str, Any]:
        """Asset manifest, metadata location or captions location for one item."""

        identifier = str(nasa_id or "").strip()
        if not identifier:
            raise ValidationError("NASA ID is required")
        if kind not in MEDIA_ASSET_KINDS:
            raise ValidationError(
                f"Invalid kind. Valid options: {', '.join(MEDIA_ASSET_KINDS)}", details={"kind": kind}
            )
        with log_context(endpoint=f"media_{kind}", nasa_id=identifier):
            return self.images.get_json(f"/{kind}/{quote(identifier, safe='')}")

    # ------------------------------------------------------------------- TLE

    def tle_page(self, page: Any = 1, page_size: Any = 50) -> Dict[str, Any]:
        page_num = _to_int(page, "page")
        if page_num < 1:
            raise ValidationError("Invalid page number. Must be a positive integer.", details={"received": page})
        size = _to_int(page_size, "page_size")
        if not 1 <= size <= TLE_MAX_PAGE_SIZE:
            raise ValidationError(
                f"Invalid page_size. Must be between 1 and {TLE_MAX_PAGE_SIZE}.", details={"received": page_size}
            )
        with log_context(endpoint="tle_page", page=page_num):
            data = self.tle.get_json("", {"page": page_num, "page_size": size})
        return {
            **data,
            "pagination": {"current_page": page_num, "page_size": size, "requested_at": self._timestamp()},
        }

    def tle_search(self, name: Optional[str]) -> Dict[str, Any]:
        term = (name or "").strip()
        if not term:
            raise ValidationError("Satellite name is required")
        with log_context(endpoint="tle_search"):
            return self.tle.get_json("", {"search": term})

    def tle_category(self, category: str) -> Dict[str, Any]:
        lowered = (category or "").lower()
        if lowered not in TLE_CATEGORIES:
            raise ValidationError(
                f"Invalid category. Valid categories: {', '.join(TLE_CATEGORIES)}", details={"category": category}
            )
        with log_context(endpoint="tle_category", category=lowered):
            return self.tle.get_json("", {"category": lowered})

    def _satellite_id(self, value: Any) -> str:
        text = str(value if value is not None else "").strip()
        if not text.isdigit():
            raise ValidationError("Invalid satellite ID. Must be a number.", details={"satellite_id": value})
        return text

    def _fetch_elements(self, satellite_id: Any) -> Tuple[Dict[str, Any], OrbitalElementSet]:
        norad_id = self._satellite_id(satellite_id)
        with log_context(endpoint="tle_satellite", norad_id=norad_id):
            record = self.tle.get_json(f"/{norad_id}")
            if not isinstance(record, Mapping):
                raise UpstreamError("Invalid response from TLE API", status=502, endpoint=f"/{norad_id}")
            try:
                elements = parse_tle(record.get("name"), record.get("line1"), record.get("line2"))
            except ParseError:
                _LOGGER.warning("Upstream returned an unparseable TLE", extra={"norad_id": norad_id})
                raise
        return dict(record), elements

    def tle_elements(self, satellite_id: Any) -> OrbitalElementSet:
        return self._fetch_elements(satellite_id)[1]

    def tle_satellite(self, satellite_id: Any) -> Dict[str, Any]:
        """Fetch one element set, parse it and attach the derived orbit."""

        record, elements = self._fetch_elements(satellite_id)
        return {
            "satellite_id": elements.satellite_number,
            "name": elements.name,
            "date": record.get("date"),
            "elements": elements.as_dict(),
            "orbit": derive(elements).as_dict(),
        }

    def tle_satellites(self, satellite_ids: Iterable[Any]) -> List[Dict[str, Any]]:
        ids = [str(item).strip() for item in satellite_ids]
        invalid = [item for item in ids if not item.isdigit()]
        if invalid:
            raise ValidationError(
                f"Invalid satellite IDs: {', '.join(invalid) or '(empty)'}. All IDs must be numbers.",
                details={"invalid": invalid},
            )
        if not ids:
            raise ValidationError("At least one satellite ID is required")
        if len(ids) > TLE_MAX_BATCH:
            raise ValidationError(f"Too many satellite IDs. Maximum {TLE_MAX_BATCH} satellites per request.")
        return [self.tle_satellite(item) for item in ids]


__all__ = [
    "APOD_FIRST_DATE",
    "EONET_MAX_DAYS",
    "EONET_MAX_LIMIT",
    "ExplorerService",
    "MARS_ROVERS",
    "MEDIA_TYPES",
    "TECH_TRANSFER_CATEGORIES",
    "TLE_CATEGORIES",
    "ValidationError",
    "enrich_event",
    "ensure_https",
    "error_payload",
    "parse_date",
    "status_for",
    "strip_markup",
    "unwrap_results",
]
