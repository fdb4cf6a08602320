"""
Prompt templates for the grammar check model call.

The system prompt sets the persona, the requested writing style and the
focus areas. The user prompt carries the text itself and the exact JSON
shape the reply must follow.
"""

from models.enums import DetectedLanguage, WritingStyle
from models.grammar import MAX_SUGGESTIONS

STYLE_GUIDES: dict[str, str] = {
    WritingStyle.FORMAL.value: "Use professional language, avoid contractions, maintain objectivity",
    WritingStyle.CASUAL.value: "Use conversational tone, contractions are acceptable, friendly approach",
    WritingStyle.INFORMAL.value: "Relaxed language, colloquialisms allowed, personal tone",
    WritingStyle.GEN_Z.value: "Modern slang acceptable, internet culture references, trendy expressions",
    WritingStyle.ACADEMIC.value: (
        "Scholarly tone, precise terminology, citation-ready format, passive voice acceptable"
    ),
}

DEFAULT_STYLE = WritingStyle.FORMAL.value

SYSTEM_PROMPT_TEMPLATE = """\
You are an expert grammar checker for {language} text.
The user wants their text to follow the {style} writing style: {guide}.
Write every "explanation" field in Indonesian (Bahasa Indonesia).
The "original", "suggestion" and "processedText" fields must stay in {language}.

Focus on:
1. Grammatical correctness
2. Spelling accuracy
3. Punctuation
4. Style consistency
5. Clarity and readability

Give constructive suggestions that keep the original meaning while improving the quality of the text.
"""

USER_PROMPT_TEMPLATE = """\
Check the following text for grammar, spelling and writing style issues in {language}.
Give at most {max_suggestions} of the most important suggestions.
The "explanation" field must be written in Indonesian.
The "original", "suggestion" and "processedText" fields must stay in {language}.

Text to check:
"{text}"

Return the response in the following JSON format:
{{
  "suggestions": [
    {{
      "original": "original text segment",
      "suggestion": "corrected text",
      "explanation": "short explanation of the fix, in Indonesian",
      "startIndex": 0,
      "endIndex": 10
    }}
  ],
  "detectedLanguage": "{language}",
  "processedText": "the fully corrected version of the text"
}}
"""


def _value(item: str | WritingStyle | DetectedLanguage) -> str:
    return item.value if hasattr(item, "value") else str(item)


def get_style_guide(style: str | WritingStyle) -> str:
    """Guide phrase for a style; unknown styles get the formal guide."""
    return STYLE_GUIDES.get(_value(style), STYLE_GUIDES[DEFAULT_STYLE])


def build_system_prompt(style: str | WritingStyle, language: str | DetectedLanguage) -> str:
    return SYSTEM_PROMPT_TEMPLATE.format(
        language=_value(language),
        style=_value(style),
        guide=get_style_guide(style),
    )


def build_user_prompt(text: str, language: str | DetectedLanguage) -> str:
    return USER_PROMPT_TEMPLATE.format(
        text=text,
        language=_value(language),
        max_suggestions=MAX_SUGGESTIONS,
    )
