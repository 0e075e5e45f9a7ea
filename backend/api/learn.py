from fastapi import APIRouter, Response

from schemas.learn import CurriculumResponse, Lesson
from utils.curriculum import get_lesson, load_curriculum

router = APIRouter(prefix="/learn-quran", tags=["learn"])

CURRICULUM_CACHE_CONTROL = "public, max-age=86400"


@router.get("", response_model=CurriculumResponse)
async def curriculum(response: Response):
    response.headers["Cache-Control"] = CURRICULUM_CACHE_CONTROL
    return CurriculumResponse(curriculum=load_curriculum())


@router.get("/lessons/{lesson_id}", response_model=Lesson)
async def lesson(lesson_id: int, response: Response):
    response.headers["Cache-Control"] = CURRICULUM_CACHE_CONTROL
    return get_lesson(lesson_id)
