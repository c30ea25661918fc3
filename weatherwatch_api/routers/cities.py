"""
City Directory Router
"""

from typing import List

from fastapi import APIRouter, Depends

from weatherwatch_core.models import CityRecord
from weatherwatch_api.dependencies import get_city_directory
from weatherwatch_api.services.city_directory import CityDirectory

router = APIRouter(tags=["Cities"])


@router.get("/cities", response_model=List[CityRecord], response_model_by_alias=True)
async def list_cities(directory: CityDirectory = Depends(get_city_directory)):
    """All known cities, sorted by name"""
    return list(directory.list_cities())
