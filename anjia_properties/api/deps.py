# anjia_properties/api/deps.py

"""FastAPI dependencies shared by the route modules."""

from fastapi import Request

from anjia_properties.services.resolution_pipeline import ResolutionPipeline


def get_pipeline(request: Request) -> ResolutionPipeline:
    """The process-wide pipeline created in :func:`create_app`."""
    pipeline: ResolutionPipeline = request.app.state.pipeline
    return pipeline
