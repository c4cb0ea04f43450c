"""
Tests for package __init__ imports — verifies all public symbols are accessible.
"""
from __future__ import annotations


class TestModelsInit:
    def test_all_exports(self):
        from parkwatch.models import (
            JsonStore,
            default_sightings,
            default_users,
            get_sighting_store,
            get_user_store,
        )
        assert JsonStore is not None
        assert get_sighting_store is not None


class TestSchemasInit:
    def test_all_exports(self):
        from parkwatch.schemas import (
            Coordinates,
            HeatmapResponse,
            LocationValidationResponse,
            PickResponse,
            RenderRequest,
            RenderResponse,
            Sighting,
            SightingCreate,
            SightingStats,
            User,
            UserProfile,
            ViewportIn,
        )
        assert Sighting is not None


class TestServicesInit:
    def test_all_exports(self):
        from parkwatch.services import (
            HeatmapCache,
            SightingFilter,
            SightingService,
            build_profile,
            build_transform,
            get_heatmap_cache,
        )
        assert SightingService is not None


class TestRoutersInit:
    def test_all_exports(self):
        from parkwatch.routers import maps, sightings, users
        assert maps.router.prefix == "/map"
        assert sightings.router.prefix == "/sightings"
        assert users.router.prefix == "/users"


class TestSpatialInit:
    def test_all_exports(self):
        from parkwatch.spatial import (
            GeoBounds,
            InteractionController,
            RenderLayerSet,
            SpatialBinner,
            ViewportTransform,
        )
        assert ViewportTransform is not None
        assert GeoBounds is not None


class TestPackageInit:
    def test_version(self):
        import parkwatch
        assert parkwatch.__version__ == "0.1.0"
