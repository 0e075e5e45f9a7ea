from pydantic import BaseModel


class ReciterResponse(BaseModel):
    id: int
    name: str
    arabic_name: str
    style: str
    image_url: str
    link: str
    full_name: str


class RecitersResponse(BaseModel):
    status: str = "success"
    data: list[ReciterResponse]
    cache: str
    count: int
    message: str | None = None


class SurahSummary(BaseModel):
    number: int
    name: str
    arabic_name: str
    verses_count: int
    revelation_place: str
    revelation_order: int


class ReciterSummary(BaseModel):
    id: int
    name: str
    quality: str
    available_qualities: list[str]


class AudioVerse(BaseModel):
    verse_key: str
    url: str
    duration: float


class AudioListing(BaseModel):
    total_verses: int
    format: str = "mp3"
    verses: list[AudioVerse]


class SurahAudioResponse(BaseModel):
    status: str = "success"
    surah: SurahSummary
    reciter: ReciterSummary
    audio: AudioListing
    cache: str


class MemorizeReciter(BaseModel):
    id: int
    name: str
    style: str


class VerseAudioResponse(BaseModel):
    audio_url: str | None
    verse_key: str
    reciter_id: int
