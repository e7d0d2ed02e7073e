from .geocoding import GeocodingError, NominatimGeocodingClient

__all__ = ["GeocodingError", "NominatimGeocodingClient"]
