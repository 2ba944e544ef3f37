"""
FastAPI server for FilmLab.
"""

from typing import Optional, Union
from uuid import UUID

from filmlab.config import get_settings
from filmlab.core.logging import get_logger
from filmlab.journal.store import CalculationJournal
from filmlab.reference.models import ReferenceDataset

logger = get_logger(__name__)

API_VERSION = "1.0.0"


def create_app(
    dataset: Optional[ReferenceDataset] = None,
    journal: Optional[CalculationJournal] = None,
):
    """Create the FastAPI application.

    Args:
        dataset: Reference data to serve. Loaded from the configured
            directory (or bundled data) when omitted.
        journal: Calculation journal. Opened at the configured path when omitted.
    """
    try:
        from fastapi import FastAPI, HTTPException, Request
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse
        from pydantic import BaseModel, Field
    except ImportError:
        raise ImportError("FastAPI is required. Install with: pip install filmlab[api]")

    from filmlab.core.exceptions import InvalidInputError
    from filmlab.development import DevelopmentTimeCalculator
    from filmlab.journal import (
        CalculationRecord,
        record_from_development,
        record_from_push_pull,
    )
    from filmlab.pushpull import PushPullCalculator, PushPullInput
    from filmlab.reference import ReferenceResolver, load_reference_dataset

    settings = get_settings()
    app = FastAPI(
        title="FilmLab API",
        description="Film development times, temperature correction and push/pull ladders",
        version=API_VERSION,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=settings.api.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # State
    resolver = ReferenceResolver(dataset if dataset is not None else load_reference_dataset())
    development = DevelopmentTimeCalculator(resolver)
    push_pull = PushPullCalculator()
    journal = journal if journal is not None else CalculationJournal()

    # Pydantic models
    class DevelopmentTimeRequest(BaseModel):
        film_id: str
        developer_id: str
        dilution: str
        iso: int
        temperature: float = Field(
            default=settings.calculator.default_temperature_c, allow_inf_nan=False
        )
        save: bool = False

    class PushPullRequest(BaseModel):
        minutes: Union[int, str]
        seconds: Union[int, str] = 0
        coefficient: Union[float, str] = Field(default=settings.calculator.default_coefficient)
        is_push_mode: Optional[bool] = None
        steps: Optional[int] = None
        temperature: float = Field(
            default=settings.calculator.default_temperature_c, allow_inf_nan=False
        )
        save: bool = False

    class RecordRequest(BaseModel):
        film_name: str
        developer_name: str
        dilution: str = ""
        iso: int = Field(..., gt=0)
        temperature: float = Field(..., allow_inf_nan=False)
        time: int = Field(..., ge=0)

    @app.exception_handler(InvalidInputError)
    async def invalid_input_handler(request: Request, exc: InvalidInputError):
        return JSONResponse(
            status_code=422,
            content={"detail": exc.args[0], "field": exc.field},
        )

    # Routes
    @app.get("/")
    async def root():
        return {"message": "FilmLab API", "version": API_VERSION}

    @app.get("/api/health")
    async def health():
        return {"status": "healthy", "reference_entries": len(resolver.dataset)}

    @app.get("/api/films")
    async def list_films():
        return [film.model_dump() for film in resolver.films()]

    @app.get("/api/developers")
    async def list_developers():
        return [developer.model_dump() for developer in resolver.developers()]

    @app.get("/api/dilutions")
    async def list_dilutions(film_id: str, developer_id: str):
        return {"dilutions": development.available_dilutions(film_id, developer_id)}

    @app.get("/api/isos")
    async def list_isos(film_id: str, developer_id: str, dilution: str):
        return {"isos": development.available_isos(film_id, developer_id, dilution)}

    @app.post("/api/development-time")
    def calculate_development_time(request: DevelopmentTimeRequest):
        """Temperature adjusted development time."""
        result = development.calculate_detailed(
            request.film_id,
            request.developer_id,
            request.dilution,
            request.iso,
            request.temperature,
        )
        if result is None:
            raise HTTPException(
                status_code=404, detail="No development data for this combination"
            )

        response = result.to_dict()
        if request.save:
            film = resolver.get_film(request.film_id)
            developer = resolver.get_developer(request.developer_id)
            record = record_from_development(result, film, developer)
            response["record_id"] = str(journal.save(record).id)
        return response

    @app.post("/api/push-pull")
    def calculate_push_pull(request: PushPullRequest):
        """Push or pull ladder for a base time."""
        params = PushPullInput.parse(
            request.minutes,
            request.seconds,
            request.coefficient,
            is_push_mode=request.is_push_mode,
            steps=request.steps,
        )
        steps = push_pull.calculate(params)

        response = {
            "mode": "push" if params.is_push_mode else "pull",
            "coefficient": params.coefficient,
            "results": [step.to_dict() for step in steps],
        }
        if request.save:
            record = record_from_push_pull(steps, params.coefficient, request.temperature)
            response["record_id"] = str(journal.save(record).id)
        return response

    @app.get("/api/records")
    def list_records(limit: Optional[int] = None):
        return [record.model_dump(mode="json") for record in journal.list_records(limit=limit)]

    @app.post("/api/records")
    def create_record(request: RecordRequest):
        record = journal.save(CalculationRecord(**request.model_dump()))
        return record.model_dump(mode="json")

    @app.delete("/api/records/{record_id}")
    def delete_record(record_id: UUID):
        if not journal.delete(record_id):
            raise HTTPException(status_code=404, detail="Record not found")
        return {"deleted": str(record_id)}

    return app


def main():
    """Run the API server."""
    try:
        import uvicorn
    except ImportError:
        raise ImportError("uvicorn is required. Install with: pip install filmlab[api]")

    from filmlab.core.logging import setup_logging

    settings = get_settings()
    setup_logging(level=settings.log_level)
    settings.ensure_directories()
    app = create_app()

    uvicorn.run(
        app,
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.reload,
    )


if __name__ == "__main__":
    main()
