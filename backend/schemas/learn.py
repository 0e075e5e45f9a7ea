from pydantic import BaseModel


class LessonItem(BaseModel):
    id: str | None = None
    text: str
    name: str
    audio: str | None = None


class Lesson(BaseModel):
    id: int
    title: str
    description: str
    audio_base: str | None = None
    items: list[LessonItem]


class Curriculum(BaseModel):
    title: str
    lessons: list[Lesson]


class CurriculumResponse(BaseModel):
    curriculum: Curriculum
