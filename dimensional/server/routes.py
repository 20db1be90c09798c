"""
Dimensional API Routes
======================

HTTP endpoints for conversion and registry inspection.

    uvicorn dimensional.server.routes:app --host 0.0.0.0 --port 8080
"""

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Request

from dimensional import __version__
from dimensional.config import load_environment_units
from dimensional.errors import (
    DimensionMismatchError,
    DivisionByZeroError,
    NotFoundError,
    QuantityError,
)
from dimensional.quantity import Quantity
from dimensional.registry import UnitRegistry, get_default_registry

logger = logging.getLogger(__name__)

OPERATIONS = ('add', 'subtract', 'multiply', 'divide')


def _to_http(error: QuantityError) -> HTTPException:
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=404, detail=str(error))
    if isinstance(error, (DimensionMismatchError, DivisionByZeroError)):
        return HTTPException(status_code=400, detail=str(error))
    return HTTPException(status_code=422, detail=str(error))


async def _json_body(request: Request) -> Dict[str, Any]:
    try:
        body = await request.json()
    except ValueError:
        raise HTTPException(status_code=400, detail="Body must be JSON")
    if not isinstance(body, dict):
        raise HTTPException(status_code=400, detail="Body must be a JSON object")
    return body


def _transport(body: Dict[str, Any], key: str) -> Dict[str, Any]:
    data = body.get(key)
    if not isinstance(data, dict) or 'value' not in data or 'unit' not in data:
        raise HTTPException(status_code=400, detail=f"'{key}' must be {{'value': number, 'unit': string}}")
    return data


def create_app(registry: Optional[UnitRegistry] = None) -> FastAPI:
    """Build the API around a registry (process default if None)."""
    if registry is None:
        registry = get_default_registry()
        load_environment_units(registry)

    app = FastAPI(
        title="dimensional",
        description="Dimensionally-safe quantity conversion",
        version=__version__,
    )
    app.state.registry = registry

    @app.get("/health")
    async def health():
        """Health check."""
        return {"status": "ok", "version": __version__}

    @app.get("/dimensions")
    async def dimensions():
        """List registered dimensions."""
        return [
            {
                "name": dim.name,
                "base_unit": dim.base_unit_symbol,
                "units": sorted(dim.units),
            }
            for dim in registry.list_dimensions()
        ]

    @app.get("/units")
    async def units(dimension: Optional[str] = None):
        """List unit definitions, optionally for one dimension."""
        try:
            defs = registry.list_units(dimension)
        except QuantityError as e:
            raise _to_http(e)
        return [
            {
                "symbol": u.symbol,
                "dimension": u.dimension_name,
                "factor": u.factor,
                "offset": u.offset,
            }
            for u in defs
        ]

    @app.post("/convert")
    async def convert(request: Request):
        """
        Convert a quantity.

        Body:
            {"value": 100, "unit": "degF", "target": "degC"}
        """
        body = await _json_body(request)
        if 'target' not in body:
            raise HTTPException(status_code=400, detail="'target' is required")
        try:
            q = Quantity.from_transport(body, registry)
            result = q.convert_to(body['target'])
        except QuantityError as e:
            raise _to_http(e)
        except (TypeError, ValueError) as e:
            raise HTTPException(status_code=400, detail=str(e))
        return result.to_transport()

    @app.post("/evaluate")
    async def evaluate(request: Request):
        """
        Apply one arithmetic operation to two quantities.

        Body:
            {"left": {"value": 5, "unit": "m"}, "op": "divide",
             "right": {"value": 2, "unit": "s"}}
        """
        body = await _json_body(request)
        op = body.get('op')
        if op not in OPERATIONS:
            raise HTTPException(status_code=400, detail=f"'op' must be one of {list(OPERATIONS)}")
        try:
            left = Quantity.from_transport(_transport(body, 'left'), registry)
            right = Quantity.from_transport(_transport(body, 'right'), registry)
            result = getattr(left, op)(right)
        except QuantityError as e:
            raise _to_http(e)
        except (TypeError, ValueError) as e:
            raise HTTPException(status_code=400, detail=str(e))

        logger.debug(f"evaluate {left!r} {op} {right!r} -> {result!r}")
        return {**result.to_transport(), "display": result.to_display_string()}

    return app


app = create_app()
