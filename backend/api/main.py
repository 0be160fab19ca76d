"""
FastAPI backend for Carry Lab.

This provides REST API endpoints for position calibration, shot measurement,
wind-effect analysis and weather lookup, enabling framework-agnostic
frontend development.
"""

from fastapi import FastAPI, HTTPException, Depends
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from typing import Dict, List, Optional, Any
import logging
import math
import sys
import os

# Add parent directory to path to import our modules
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config.settings import (
    APP_NAME, APP_VERSION, APP_DESCRIPTION, CORS_ALLOWED_ORIGINS,
    CalibrationConfig, WindConfig, WeatherConfig, configure_logging
)
from core.calibration import calibrate
from core.models.position import Coordinate, Sample
from core.models.shot import Club
from core.models.weather import WeatherData
from core.models.wind import Trajectory, WindInputs
from core.validation import ValidationError
from core.wind.effect import DEFAULT_PARAMS, analyze
from services.shot_measurement_service import get_shot_measurement_service
from services.weather_service import WeatherService, get_weather_service, wmo_code_to_label

# Initialize logging
configure_logging()
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=f"{APP_NAME} API",
    description=APP_DESCRIPTION,
    version=APP_VERSION
)

# Add CORS middleware for frontend access
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


# Pydantic models for API requests/responses
class SampleModel(BaseModel):
    latitude: float
    longitude: float
    accuracy_meters: float
    captured_at_ms: int = 0

    def to_sample(self) -> Sample:
        return Sample(
            coordinate=Coordinate(self.latitude, self.longitude),
            accuracy_meters=self.accuracy_meters,
            captured_at_ms=self.captured_at_ms,
        )


class CalibrationRequest(BaseModel):
    samples: List[SampleModel]


class CalibrationResponse(BaseModel):
    latitude: float
    longitude: float
    estimated_accuracy_meters: float
    inlier_count: int


class WeatherModel(BaseModel):
    temperature_celsius: float
    weather_code: int = -1
    wind_speed_kmh: float
    wind_direction_degrees: int

    def to_weather(self) -> WeatherData:
        return WeatherData(
            temperature_celsius=self.temperature_celsius,
            weather_code=self.weather_code,
            wind_speed_kmh=self.wind_speed_kmh,
            wind_direction_degrees=self.wind_direction_degrees,
        )


class ShotRequest(BaseModel):
    start_samples: List[SampleModel]
    end_samples: List[SampleModel]
    club: str = "DRIVER"
    trajectory: str = WindConfig.DEFAULT_TRAJECTORY
    weather: Optional[WeatherModel] = None
    timestamp_ms: Optional[int] = None


class ShotResponse(BaseModel):
    measurement: Dict[str, Any]
    record: Dict[str, Any]
    wind_effect: Optional[Dict[str, Any]]
    warnings: List[str] = []


class WindEffectRequest(BaseModel):
    wind_speed_kmh: float
    wind_from_degrees: int
    shot_bearing_degrees: float
    distance_yards: int
    trajectory: str = WindConfig.DEFAULT_TRAJECTORY
    temperature_f: Optional[int] = None


def _parse_trajectory(name: str) -> Trajectory:
    try:
        return Trajectory[name.upper()]
    except KeyError as e:
        raise HTTPException(status_code=422, detail=f"Unknown trajectory: {name}") from e


def _parse_club(name: str) -> Club:
    club = Club.from_name(name.upper())
    if club is None:
        raise HTTPException(status_code=422, detail=f"Unknown club: {name}")
    return club


def _json_safe(value: Any) -> Any:
    """Replace NaN/infinite floats with None; JSON cannot carry them."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {key: _json_safe(item) for key, item in value.items()}
    return value


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "message": f"{APP_NAME} API",
        "version": APP_VERSION,
        "endpoints": {
            "POST /api/calibrate": "Calibrate one position from a burst of GPS samples",
            "POST /api/shots/measure": "Measure a shot from start and end sample bursts",
            "POST /api/wind-effect": "Estimate wind and temperature effect on a carry",
            "GET /api/weather": "Current weather at a coordinate",
            "GET /api/config": "Default configuration values",
            "GET /api/health": "Health check endpoint"
        }
    }


@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "carry-lab-api"}


@app.get("/api/config")
async def get_config():
    """Get default configuration values."""
    return {
        "calibration": CalibrationConfig.as_dict(),
        "wind": WindConfig.as_dict(),
        "wind_model": DEFAULT_PARAMS.to_dict(),
        "weather": WeatherConfig.as_dict(),
        "trajectories": {t.name: t.multiplier for t in Trajectory},
    }


@app.post("/api/calibrate", response_model=CalibrationResponse)
async def calibrate_position(request: CalibrationRequest):
    """
    Calibrate a single position.

    Returns 422 when too few samples survive the accuracy gate or outlier
    rejection; clients should then use their latest raw fix.
    """
    result = calibrate([s.to_sample() for s in request.samples])
    if result is None:
        raise HTTPException(status_code=422, detail="Not enough usable samples to calibrate")

    return CalibrationResponse(
        latitude=result.coordinate.latitude,
        longitude=result.coordinate.longitude,
        estimated_accuracy_meters=result.estimated_accuracy_meters,
        inlier_count=result.inlier_count,
    )


@app.post("/api/shots/measure", response_model=ShotResponse)
async def measure_shot(request: ShotRequest):
    """
    Measure a shot.

    Args:
        request: Start and end sample bursts, club, trajectory and optional
            already-resolved weather

    Returns:
        Measurement, plain shot record, (when weather is given) wind effect
        and any plausibility warnings
    """
    club = _parse_club(request.club)
    trajectory = _parse_trajectory(request.trajectory)
    weather = request.weather.to_weather() if request.weather else None
    service = get_shot_measurement_service()

    try:
        measurement = service.measure(
            [s.to_sample() for s in request.start_samples],
            [s.to_sample() for s in request.end_samples],
        )
        record = service.record(club, measurement, weather, request.timestamp_ms)
        warnings = service.check(measurement, record, weather)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Error measuring shot: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error measuring shot: {str(e)}") from e

    # The wind effect is display-only; an unusable input never rejects the shot
    try:
        wind_effect = service.analyze_wind(measurement, weather, trajectory)
    except ValidationError as e:
        logger.warning(f"Wind effect skipped: {e}")
        wind_effect = None
        warnings.append(f"Wind effect unavailable: {e}")

    return ShotResponse(
        measurement=_json_safe(measurement.to_dict()),
        record=_json_safe(record.to_dict()),
        wind_effect=_json_safe(wind_effect.to_dict()) if wind_effect else None,
        warnings=warnings,
    )


@app.post("/api/wind-effect")
async def wind_effect(request: WindEffectRequest):
    """Estimate the wind and temperature effect on a carry."""
    trajectory = _parse_trajectory(request.trajectory)
    inputs = WindInputs(
        wind_speed_kmh=request.wind_speed_kmh,
        wind_from_degrees=request.wind_from_degrees,
        shot_bearing_degrees=request.shot_bearing_degrees,
        distance_yards=request.distance_yards,
        trajectory_multiplier=trajectory.multiplier,
        temperature_f=request.temperature_f,
    )
    try:
        return analyze(inputs).to_dict()
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e


@app.get("/api/weather")
def current_weather(
    latitude: float,
    longitude: float,
    weather_service: WeatherService = Depends(get_weather_service)
):
    """
    Current weather at a coordinate; 503 when the lookup is unavailable.

    A plain def so FastAPI runs the blocking HTTP lookup in its threadpool
    instead of on the event loop serving shot measurements.
    """
    data = weather_service.get_weather(Coordinate(latitude, longitude))
    if data is None:
        raise HTTPException(status_code=503, detail="Weather unavailable")

    response = data.to_dict()
    response["description"] = wmo_code_to_label(data.weather_code)
    return response


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
