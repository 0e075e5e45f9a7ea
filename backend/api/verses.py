from fastapi import APIRouter, Query

from schemas.index import VerseLocationResponse, VerseRangeResponse
from utils.partitions import locate_ayah
from utils.quran_data import absolute_to_ayah_key, get_ayahs_in_range, parse_verse_key

router = APIRouter(prefix="/verses", tags=["verses"])


@router.get("/absolute/{absolute}", response_model=VerseLocationResponse)
async def verse_by_absolute(absolute: int):
    key = absolute_to_ayah_key(absolute)
    return VerseLocationResponse.build(key, locate_ayah(key))


@router.get("/key/{verse_key}", response_model=VerseLocationResponse)
async def verse_by_key(verse_key: str):
    key = parse_verse_key(verse_key)
    return VerseLocationResponse.build(key, locate_ayah(key))


@router.get("/range", response_model=VerseRangeResponse)
async def verse_range(start: str = Query(...), end: str = Query(...)):
    start_key, end_key = parse_verse_key(start), parse_verse_key(end)
    keys = [str(k) for k in get_ayahs_in_range(start_key, end_key)]
    return VerseRangeResponse(start=str(start_key), end=str(end_key), count=len(keys), verse_keys=keys)
