import logging
from contextlib import asynccontextmanager
from starlette.applications import Starlette
from starlette.exceptions import HTTPException
from starlette.middleware import Middleware
from starlette.responses import JSONResponse
from starlette.requests import Request
from starlette.routing import Route
import config
from db import init_db
from errors import ApiError, RateLimitedError, ValidationError
from rate_limit import FixedWindowRateLimiter
from request_log import RequestLogMiddleware
import analytics
import trips
import users
import vehicles

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    config.configure_logging()
    init_db()
    yield


async def read_json(request: Request) -> dict:
    try:
        payload = await request.json()
    except ValueError:
        raise ValidationError("request body must be valid JSON")
    if not isinstance(payload, dict):
        raise ValidationError("request body must be a JSON object")
    return payload


async def health(request: Request):
    return JSONResponse({"status": "ok"})


async def signup(request: Request):
    payload = await read_json(request)
    user = users.signup(payload)
    return JSONResponse(users.public_user(user), status_code=201)


async def add_vehicle(request: Request):
    limiter = request.app.state.vehicle_rate_limiter
    client = request.client.host if request.client else "unknown"
    if not limiter.hit(client):
        raise RateLimitedError("too many vehicle registrations, try again later")
    payload = await read_json(request)
    vehicle = vehicles.add_vehicle(payload)
    return JSONResponse(vehicle.model_dump(mode="json"), status_code=201)


async def assign_driver(request: Request):
    vehicle_id = request.path_params["vehicle_id"]
    payload = await read_json(request)
    vehicle = vehicles.assign_driver(vehicle_id, payload)
    return JSONResponse(vehicle.model_dump(mode="json"))


async def get_vehicle(request: Request):
    vehicle = vehicles.get_vehicle(request.path_params["vehicle_id"])
    return JSONResponse(vehicle.model_dump(mode="json"))


async def create_trip(request: Request):
    payload = await read_json(request)
    trip = trips.create_trip(payload)
    return JSONResponse(trip.model_dump(mode="json"), status_code=201)


async def update_trip(request: Request):
    trip_id = request.path_params["trip_id"]
    payload = await read_json(request)
    trip = trips.update_trip(trip_id, payload)
    return JSONResponse(trip.model_dump(mode="json"))


async def end_trip(request: Request):
    trip = trips.end_trip(request.path_params["trip_id"])
    return JSONResponse(trip.model_dump(mode="json"))


async def delete_trip(request: Request):
    trip_id = request.path_params["trip_id"]
    trips.delete_trip(trip_id)
    return JSONResponse({"message": "trip deleted", "trip_id": trip_id})


async def get_trip(request: Request):
    trip = trips.get_trip(request.path_params["trip_id"])
    return JSONResponse(trip.model_dump(mode="json"))


async def get_analytics(request: Request):
    return JSONResponse(analytics.collect_counts())


async def handle_api_error(request: Request, exc: ApiError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


async def handle_not_found(request: Request, exc: HTTPException):
    return JSONResponse({"error": "This Request Is Not Found"}, status_code=404)


routes = [
    Route("/", health, methods=["GET"]),
    Route("/users/signup", signup, methods=["POST"]),
    Route("/vehicles/add", add_vehicle, methods=["POST"]),
    Route("/vehicles/assign-driver/{vehicle_id}", assign_driver, methods=["PATCH"]),
    Route("/vehicles/{vehicle_id}", get_vehicle, methods=["GET"]),
    Route("/trips/create", create_trip, methods=["POST"]),
    Route("/trips/update/{trip_id}", update_trip, methods=["PATCH"]),
    Route("/trips/end/{trip_id}", end_trip, methods=["PATCH"]),
    Route("/trips/delete/{trip_id}", delete_trip, methods=["DELETE"]),
    Route("/trips/{trip_id}", get_trip, methods=["GET"]),
    Route("/analytics", get_analytics, methods=["GET"]),
]


def create_app(rate_limiter=None) -> Starlette:
    app = Starlette(
        debug=config.DEBUG,
        routes=routes,
        middleware=[Middleware(RequestLogMiddleware)],
        exception_handlers={ApiError: handle_api_error, 404: handle_not_found, 405: handle_not_found},
        lifespan=lifespan,
    )
    app.state.vehicle_rate_limiter = rate_limiter or FixedWindowRateLimiter(
        limit=config.VEHICLE_RATE_LIMIT,
        window=config.VEHICLE_RATE_WINDOW_SECONDS,
    )
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host=config.HOST, port=config.PORT)
