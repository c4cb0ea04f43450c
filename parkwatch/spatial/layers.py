"""
Render Layer Set
================
Ordered, independently toggleable layers that turn geographic features
into screen-space drawables.

A layer is a plain descriptor: a name, a z-index and a ``build``
callable that receives a ``RenderContext`` and returns drawables.  Every
coordinate goes through ``ViewportTransform.project`` on every render,
and anything outside the visibility margin is culled.  The layers carry
no styling; ``Drawable.style`` is only a category the front end maps to
colours and icons.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Callable, Iterable, Sequence

from shapely.geometry import Polygon

from parkwatch.spatial import features
from parkwatch.spatial.binning import HeatBin, heat_radius
from parkwatch.spatial.bounds import GeoPoint
from parkwatch.spatial.features import PathFeature, PointFeature
from parkwatch.spatial.transform import PixelPoint, ViewportTransform


# ── Inputs / outputs ─────────────────────────────────────────────
@dataclass(frozen=True, slots=True)
class Marker:
    """The subset of a sighting the map needs."""

    id: str
    point: GeoPoint
    type: str
    threat_level: str
    label: str = ""


@dataclass(frozen=True, slots=True)
class Drawable:
    layer: str
    kind: str  # "point" | "circle" | "polygon" | "polyline"
    points: tuple[PixelPoint, ...]
    radius: float = 0.0
    label: str = ""
    ref_id: str | None = None
    style: str = ""
    anchor: PixelPoint | None = None
    selected: bool = False
    hovered: bool = False
    intensity: int | None = None
    opacity: float | None = None


DEFAULT_HEAT_INTENSITY = 0.7


@dataclass(slots=True)
class RenderContext:
    transform: ViewportTransform
    markers: Sequence[Marker] = ()
    heat_bins: Sequence[HeatBin] = ()
    selected_id: str | None = None
    hovered_id: str | None = None
    # Heatmap opacity in [0, 1]; the front end scales its gradient by it.
    heat_intensity: float = DEFAULT_HEAT_INTENSITY


@dataclass(slots=True)
class LayerVisibility:
    """
    On/off flags for the built-in layers.

    Layers added by the host have no field here; they are looked up in
    ``extra`` and render unless switched off there.
    """

    terrain: bool = True
    land_cover: bool = True
    water: bool = True
    roads: bool = True
    elevation: bool = False
    heatmap: bool = True
    landmarks: bool = True
    markers: bool = True
    extra: dict[str, bool] = field(default_factory=dict)

    def enabled(self, name: str) -> bool:
        if name in self.names():
            return getattr(self, name)
        return self.extra.get(name, True)

    def set(self, name: str, value: bool) -> None:
        if name in self.names():
            setattr(self, name, value)
        else:
            self.extra[name] = value

    def toggle(self, name: str) -> bool:
        value = not self.enabled(name)
        self.set(name, value)
        return value

    @classmethod
    def names(cls) -> list[str]:
        return [f.name for f in fields(cls) if f.name != "extra"]

    @property
    def active_count(self) -> int:
        builtin = sum(1 for name in self.names() if getattr(self, name))
        return builtin + sum(1 for on in self.extra.values() if on)


# Presets reproducing the map variants of the web client.
PRESETS: dict[str, LayerVisibility] = {
    "layered": LayerVisibility(),
    "traditional": LayerVisibility(land_cover=False, heatmap=False),
    "minimal": LayerVisibility(
        terrain=False, land_cover=False, water=False, roads=False,
        elevation=False, heatmap=False, landmarks=False, markers=True,
    ),
}


def preset(name: str) -> LayerVisibility:
    try:
        base = PRESETS[name]
    except KeyError:
        raise KeyError(f"Unknown layer preset {name!r}") from None
    return replace(base, extra=dict(base.extra))


@dataclass(frozen=True, slots=True)
class LayerDescriptor:
    name: str
    z_index: int
    build: Callable[[RenderContext], list[Drawable]]


# ── Projection helpers ───────────────────────────────────────────
def _project_points(
    layer: str, ctx: RenderContext, items: Iterable[PointFeature]
) -> list[Drawable]:
    out = []
    for item in items:
        px = ctx.transform.project(item.point)
        if not ctx.transform.is_visible(px):
            continue
        out.append(Drawable(layer=layer, kind="point", points=(px,), label=item.name, style=item.kind))
    return out


def _project_paths(
    layer: str, ctx: RenderContext, paths: Iterable[PathFeature]
) -> list[Drawable]:
    out = []
    for path in paths:
        pts = tuple(ctx.transform.project(p) for p in path.coords)
        if not any(ctx.transform.is_visible(p) for p in pts):
            continue
        anchor = None
        if path.closed and len(path.coords) >= 3:
            c = Polygon([(p.lng, p.lat) for p in path.coords]).centroid
            anchor = ctx.transform.project(GeoPoint(c.y, c.x))
        out.append(
            Drawable(
                layer=layer,
                kind="polygon" if path.closed else "polyline",
                points=pts,
                label=path.name,
                style=path.kind,
                anchor=anchor,
            )
        )
    return out


# ── Layer builders ───────────────────────────────────────────────
def build_terrain(ctx: RenderContext) -> list[Drawable]:
    """Park boundary outline.  Never culled: it can enclose the whole canvas."""
    b = ctx.transform.bounds
    # Shapely closes the ring by repeating the first vertex; drop it.
    ring = list(b.to_shapely().exterior.coords)[:-1]
    return [
        Drawable(
            layer="terrain",
            kind="polygon",
            points=tuple(ctx.transform.project(GeoPoint(lat, lng)) for lng, lat in ring),
            label="boundary",
            style="boundary",
            anchor=ctx.transform.project(b.center),
        )
    ]


def build_land_cover(ctx: RenderContext) -> list[Drawable]:
    return _project_paths("land_cover", ctx, features.LAND_COVER)


def build_water(ctx: RenderContext) -> list[Drawable]:
    return _project_paths("water", ctx, features.WATER_BODIES + features.RIVERS)


def build_roads(ctx: RenderContext) -> list[Drawable]:
    return _project_paths("roads", ctx, features.ROADS + features.TRAILS)


def build_elevation(ctx: RenderContext) -> list[Drawable]:
    return _project_paths("elevation", ctx, features.ELEVATION_CONTOURS)


def build_heatmap(ctx: RenderContext) -> list[Drawable]:
    out = []
    for heat_bin in ctx.heat_bins:
        px = ctx.transform.project(heat_bin.corner)
        if not ctx.transform.is_visible(px):
            continue
        out.append(
            Drawable(
                layer="heatmap",
                kind="circle",
                points=(px,),
                radius=heat_radius(heat_bin.intensity),
                intensity=heat_bin.intensity,
                opacity=ctx.heat_intensity,
            )
        )
    return out


def build_landmarks(ctx: RenderContext) -> list[Drawable]:
    return _project_points("landmarks", ctx, features.LANDMARKS + features.FACILITIES)


def build_markers(ctx: RenderContext) -> list[Drawable]:
    out = []
    for marker in ctx.markers:
        px = ctx.transform.project(marker.point)
        if not ctx.transform.is_visible(px):
            continue
        out.append(
            Drawable(
                layer="markers",
                kind="point",
                points=(px,),
                label=marker.label,
                ref_id=marker.id,
                style=f"{marker.type}:{marker.threat_level}",
                selected=marker.id == ctx.selected_id,
                hovered=marker.id == ctx.hovered_id,
            )
        )
    return out


DEFAULT_LAYERS: tuple[LayerDescriptor, ...] = (
    LayerDescriptor("terrain", 0, build_terrain),
    LayerDescriptor("land_cover", 10, build_land_cover),
    LayerDescriptor("water", 20, build_water),
    LayerDescriptor("roads", 30, build_roads),
    LayerDescriptor("elevation", 40, build_elevation),
    LayerDescriptor("heatmap", 50, build_heatmap),
    LayerDescriptor("landmarks", 60, build_landmarks),
    LayerDescriptor("markers", 70, build_markers),
)


class RenderLayerSet:
    """Renders the enabled layers bottom-to-top."""

    def __init__(self, layers: Sequence[LayerDescriptor] = DEFAULT_LAYERS) -> None:
        self.layers = sorted(layers, key=lambda layer: layer.z_index)

    @property
    def names(self) -> list[str]:
        return [layer.name for layer in self.layers]

    def render(
        self,
        ctx: RenderContext,
        visibility: LayerVisibility | None = None,
    ) -> list[Drawable]:
        visibility = visibility or LayerVisibility()
        drawables: list[Drawable] = []
        for layer in self.layers:
            if visibility.enabled(layer.name):
                drawables.extend(layer.build(ctx))
        return drawables
