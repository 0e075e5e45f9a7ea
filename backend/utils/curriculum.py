"""Noorani Qaida lessons, read once from data/learn_curriculum.json."""
import json
from pathlib import Path

from errors import NotFound
from schemas.learn import Curriculum, Lesson

DATA_FILE = Path(__file__).parent.parent / "data" / "learn_curriculum.json"

_CURRICULUM: Curriculum | None = None


def load_curriculum() -> Curriculum:
    global _CURRICULUM
    if _CURRICULUM is None:
        with open(DATA_FILE, encoding="utf-8") as f:
            _CURRICULUM = Curriculum.model_validate(json.load(f))
    return _CURRICULUM


def get_lesson(lesson_id: int) -> Lesson:
    for lesson in load_curriculum().lessons:
        if lesson.id == lesson_id:
            return lesson
    raise NotFound(f"Lesson {lesson_id} not found")
