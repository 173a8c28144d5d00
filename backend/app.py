"""FastAPI application exposing the property collection."""

import logging
from typing import Any, Dict

from bson import ObjectId
from fastapi import Depends, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from .config import FRONTEND_ORIGIN, PORT, PROPERTY_ENDPOINT
from .data_loader import load_properties
from .db import connect_db, get_property_collection
from .schemas import ErrorResponse

logger = logging.getLogger(__name__)

app = FastAPI(title="Property Listings API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=[FRONTEND_ORIGIN],
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)


def property_collection():
    return get_property_collection(connect_db())


@app.exception_handler(PyMongoError)
async def store_error_handler(request: Request, exc: PyMongoError):
    logger.error("store error on %s: %s", request.url.path, exc)
    # JSON error payload instead of HTML so the client can show its error state
    return JSONResponse(
        status_code=500,
        content={"success": False, "message": "Failed to load properties"},
    )


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.get(PROPERTY_ENDPOINT, responses={500: {"model": ErrorResponse}})
def list_properties(collection=Depends(property_collection)) -> Dict[str, Any]:
    properties = load_properties(collection)
    return {
        "success": True,
        "properties": jsonable_encoder(properties, custom_encoder={ObjectId: str}),
    }


if __name__ == "__main__":
    import uvicorn

    from .config import configure_logging

    configure_logging()
    uvicorn.run("backend.app:app", host="0.0.0.0", port=PORT, reload=True)
