"""
Name-indexed lookup over a GeoJSON FeatureCollection.

Feature names come from properties.name, then properties.NAME, then the
feature id. Lookups try an exact match, then accent- and case-insensitive
equality. Partial names never match.
"""

import json
import os
import unicodedata

from shapeblend.tracer import get_tracer, trace


class FeatureNotFoundError(LookupError):
    """Raised when a named feature is absent from the catalog."""

    def __init__(self, name):
        super().__init__(f"Feature not found: {name}")
        self.name = name


def feature_name(feature):
    """Display name of a feature, or None when it has none."""
    properties = feature.get("properties") or {}
    name = properties.get("name") or properties.get("NAME") or feature.get("id")
    if name is None or name == "":
        return None
    return str(name)


def normalize_name(name):
    """Lower-case, accent-stripped, trimmed form of a name."""
    decomposed = unicodedata.normalize("NFD", name or "")
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.lower().strip()


class FeatureCatalog:
    """
    Named features from one dataset.

    When two features share a name the later one wins.
    """

    def __init__(self, features):
        self._by_name = {}
        for feature in features:
            name = feature_name(feature)
            if name:
                self._by_name[name] = feature

    def __len__(self):
        return len(self._by_name)

    def __contains__(self, name):
        return self.find(name) is not None

    def names(self):
        """Sorted feature names."""
        return sorted(self._by_name, key=normalize_name)

    def find(self, name):
        """Feature named name (exactly, or ignoring accents and case), or None."""
        if not name:
            return None

        if name in self._by_name:
            return self._by_name[name]

        target = normalize_name(name)
        if not target:
            return None

        for candidate, feature in self._by_name.items():
            if normalize_name(candidate) == target:
                return feature

        return None

    def get(self, name):
        """Like find, but raises FeatureNotFoundError on absence."""
        feature = self.find(name)
        if feature is None:
            raise FeatureNotFoundError(name)
        return feature


@trace(label="load_catalog")
def load_catalog(path):
    """
    Load a FeatureCatalog from a GeoJSON file.

    Accepts a FeatureCollection or a single Feature.
    """
    tracer = get_tracer()

    if not os.path.exists(path):
        raise FileNotFoundError(f"GeoJSON file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    catalog = FeatureCatalog(features_from_geojson(data))

    tracer.event(f"Loaded {len(catalog)} named features from {path}")

    return catalog


def features_from_geojson(data):
    """List of Feature mappings from a parsed GeoJSON document."""
    if not isinstance(data, dict):
        raise ValueError("GeoJSON document must be an object")

    kind = data.get("type")
    if kind == "FeatureCollection":
        features = data.get("features")
        if not isinstance(features, list):
            raise ValueError("FeatureCollection has no features list")
        return [f for f in features if isinstance(f, dict)]
    if kind == "Feature":
        return [data]

    raise ValueError(f"Unsupported GeoJSON type: {kind!r}")
