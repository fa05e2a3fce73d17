"""Client-side state: cached points, map markers, selection and dashboard data."""
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from client.point import Point
from client.service import PointService

LOG = logging.getLogger(__name__)

SELECTED_ZOOM = 15

CATEGORY_ICONS: dict[str, str] = {
    "Roupas e Acessórios": "fas fa-tshirt",
    "Casa e Decoração": "fas fa-couch",
    "Cultura": "fas fa-book-open",
    "Alimentos": "fas fa-utensils",
    "Outros": "fas fa-box-open",
}


def category_icon(category: str) -> str:
    """Icon class for a category, 'Outros' for anything unknown."""
    return CATEGORY_ICONS.get(category, CATEGORY_ICONS["Outros"])


@dataclass
class Marker:
    """What the map widget needs to draw one point."""

    point_id: str
    lat: float
    lng: float
    icon: str
    popup_open: bool = False


@dataclass(frozen=True)
class MapView:
    center: tuple[float, float]
    zoom: int


class PointCache:
    """
    Last list or search result plus one marker per point id.
    Every load replaces everything; markers are never patched in place.
    """

    def __init__(self) -> None:
        self.points: list[Point] = []
        self.markers: dict[str, Marker] = {}
        self.selected: Point | None = None

    def load(self, points: list[Point]) -> None:
        self.points = list(points)
        self.markers.clear()
        self.selected = None
        for point in self.points:
            if point.id is None:
                continue
            lat, lng = point.lat_lng()
            self.markers[point.id] = Marker(point.id, lat, lng, category_icon(point.category))

    def get(self, point_id: str) -> Point | None:
        return next((p for p in self.points if p.id == point_id), None)

    def select(self, point_id: str) -> MapView | None:
        """Select a point, open its popup and return the view centred on it."""
        point = self.get(point_id)
        if point is None:
            return None
        self.selected = point
        for marker in self.markers.values():
            marker.popup_open = marker.point_id == point_id
        return MapView(center=point.lat_lng(), zoom=SELECTED_ZOOM)

    def bounds(self, pad: float = 0.1) -> tuple[tuple[float, float], tuple[float, float]] | None:
        """South-west and north-east corners around all markers, padded by a fraction of the span."""
        if not self.markers:
            return None
        lats = [m.lat for m in self.markers.values()]
        lngs = [m.lng for m in self.markers.values()]
        lat_pad = (max(lats) - min(lats)) * pad
        lng_pad = (max(lngs) - min(lngs)) * pad
        return (
            (min(lats) - lat_pad, min(lngs) - lng_pad),
            (max(lats) + lat_pad, max(lngs) + lng_pad),
        )


@dataclass(frozen=True)
class ChartSeries:
    labels: list[str]
    values: list[int]


@dataclass(frozen=True)
class DashboardSummary:
    """Statistics reshaped for the dashboard cards and charts."""

    total: int
    top_category: str
    top_region: str
    current_month: int
    by_category: ChartSeries
    by_region: ChartSeries
    growth: ChartSeries
    recent: list[dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_statistics(cls, data: dict[str, Any], today: date | None = None) -> "DashboardSummary":
        today = today or date.today()
        by_category = data.get("pontosPorTipo") or []
        by_region = data.get("distribuicaoGeografica") or []
        # API returns newest month first; charts read left to right.
        # Points stored without createdAt form a null bucket, left off the chart.
        months = [m for m in reversed(data.get("pontosPorMes") or []) if m["_id"].get("ano")]

        def headline(buckets: list[dict[str, Any]]) -> str:
            if buckets and buckets[0].get("total"):
                return f"{buckets[0]['_id']} ({buckets[0]['total']})"
            return "N/A"

        current = next(
            (
                m["total"]
                for m in months
                if m["_id"]["mes"] == today.month and m["_id"]["ano"] == today.year
            ),
            0,
        )
        return cls(
            total=data.get("totalPontos", 0),
            top_category=headline(by_category),
            top_region=headline(by_region),
            current_month=current,
            by_category=ChartSeries([b["_id"] for b in by_category], [b["total"] for b in by_category]),
            by_region=ChartSeries([b["_id"] for b in by_region], [b["total"] for b in by_region]),
            growth=ChartSeries(
                [f"{m['_id']['mes']}/{m['_id']['ano']}" for m in months],
                [m["total"] for m in months],
            ),
            recent=list(data.get("pontosRecentes") or []),
        )


class PointBrowser:
    """Ties the API client to the cache. Mutations are followed by a full reload."""

    def __init__(self, service: PointService, cache: PointCache | None = None):
        self.service = service
        self.cache = cache or PointCache()

    def reload(self) -> list[Point]:
        self.cache.load(self.service.list_points())
        return self.cache.points

    def search(self, query: str) -> list[Point]:
        """Ranked search; a blank query shows every point again."""
        if not query.strip():
            return self.reload()
        points, total = self.service.search(query.strip())
        LOG.info("%d ponto(s) encontrado(s) para %r", total, query)
        self.cache.load(points)
        return self.cache.points

    def save(self, point: Point) -> Point:
        """Create, or update when the point already has an id."""
        saved = (
            self.service.update_point(point.id, point)
            if point.id
            else self.service.create_point(point)
        )
        self.reload()
        return saved

    def delete(self, point_id: str) -> None:
        self.service.delete_point(point_id)
        self.reload()

    def dashboard(self, today: date | None = None) -> DashboardSummary:
        return DashboardSummary.from_statistics(self.service.statistics(), today)
