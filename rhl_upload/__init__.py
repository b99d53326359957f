"""RHL shapefile upload service: archive validation, storage and HTTP API."""
