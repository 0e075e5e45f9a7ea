from schemas.index import VerseLocationResponse, VerseRangeResponse, PartitionUnitResponse, PartitionVersesResponse
from schemas.quran import ChapterResponse, ChaptersResponse, VerseResponse, VersesResponse, PageVersesResponse
from schemas.audio import ReciterResponse, RecitersResponse, SurahAudioResponse, VerseAudioResponse
from schemas.learn import CurriculumResponse, Lesson

__all__ = [
    "VerseLocationResponse", "VerseRangeResponse", "PartitionUnitResponse", "PartitionVersesResponse",
    "ChapterResponse", "ChaptersResponse", "VerseResponse", "VersesResponse", "PageVersesResponse",
    "ReciterResponse", "RecitersResponse", "SurahAudioResponse", "VerseAudioResponse",
    "CurriculumResponse", "Lesson",
]
