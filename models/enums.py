from enum import Enum


class WritingStyle(str, Enum):
    FORMAL = "formal"
    CASUAL = "casual"
    INFORMAL = "informal"
    GEN_Z = "gen-z"
    ACADEMIC = "academic"


class DetectedLanguage(str, Enum):
    ENGLISH = "English"
    INDONESIAN = "Indonesian"


class LanguageHint(str, Enum):
    EN = "en"
    ID = "id"
