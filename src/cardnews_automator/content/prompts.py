"""Prompt templates for card copy and keyword generation."""

from __future__ import annotations

from ..constants import AI_ARTICLE_BODY_MAX_LENGTH, AI_KEYWORD_BODY_MAX_LENGTH
from .models import ArticleRecord, GenerationOptions

SYSTEM_PROMPT = "당신은 뉴스 기사를 7장 카드뉴스로 변환하는 편집자입니다. JSON만 응답합니다."

GENERATION_PROMPT = """다음 기사를 분석하여 7장 카드뉴스 콘텐츠를 만들어 주세요.

기사 제목: {title}
기사 내용: {body}

[헤드라인] 기사에서 가장 중요한 사실만 골라 2줄로 압축하세요.
첫 줄은 주체·사건(구체 명사 8~10자), 둘째 줄은 결과·쟁점·수치(8~10자).
'이슈·문제·상황' 같은 추상어 대신 기사 키워드를 쓰세요.

반드시 아래 JSON 형식으로만 응답하세요 (설명·주석 없이):
{{
  "headline": "주체·사건(8~10자)\\n결과·쟁점·수치(8~10자)",
  "quote": "기사 속 실제 인용구, 30자 이내",
  "quoteSpeaker": "발언자 이름과 직책 (없으면 빈 문자열)",
  "quoteContext": "발언의 배경, 60자 이내",
  "contextKeyLine": "기사 핵심을 완성형 2문장으로 (60~80자)",
  "coreProblem": "드러난 문제점 요약 (40~60자)",
  "card4KeySentence": "문제를 함축한 핵심 문장 한 줄 (25~45자)",
  "card4Explanation": "문제를 쉽게 풀어 쓴 해설 한 줄 (50~90자)",
  "beforeAfter": "BEFORE: 12명 | AFTER: 150명 | 6개월간 12배 증가",
  "whyImportant": "왜 중요한지 2문장, 각 25~35자",
  "prosCons": {{
    "question": "쟁점 질문 (15~20자)",
    "pros": "긍정적 관점 요약 (15~20자)",
    "cons": "반대 관점 요약 (15~28자)"
  }},
  "readerQuestion": "독자의 삶과 연결되는 질문 (당신은? 형태)",
  "keyFact": {{
    "facts": ["라벨: 값", "라벨: 값", "라벨: 값"]
  }}
}}

규칙:
1. headline은 2줄, 각 줄 10자 이내. 조사나 어미로 끝내지 마세요.
2. quote는 30자 이내. "~라고 밝혔다" 같은 기자 문체는 빼세요.
3. contextKeyLine·card4Explanation·whyImportant는 완성된 문장으로 끝내세요.
4. keyFact.facts는 3~5개. 라벨 2~8자, 값은 24자·7단어 이내의 수치나 고유명사 (문장 금지).
5. 글자 수를 넘기지 말고 JSON만 응답하세요."""

KEYWORD_PROMPT = """다음 기사에서 SNS 해시태그로 쓸 핵심 키워드를 4개 또는 5개만 추출하세요.
기사 제목: {title}
기사 내용 일부: {body}

규칙: 한 단어 또는 2~3단어 조합만. 인물·기관·장소·주제 중심. 문장 금지.
반드시 JSON으로만 응답하세요. 예: {{"keywords": ["국회", "예산안", "여야 합의", "본회의"]}}"""

KEYWORD_SYSTEM_PROMPT = "기사에서 해시태그용 키워드만 JSON으로 추출합니다. 설명 없이 JSON만 반환하세요."


def build_options_suffix(options: GenerationOptions | None) -> str:
    """Extra instructions for tone, length, speech style and emphasis."""
    if options is None:
        return ""

    parts: list[str] = []
    if options.tone <= 33:
        parts.append("전체 톤: 정보 전달 위주의 객관적인 정보형으로 작성해 주세요.")
    elif options.tone <= 66:
        parts.append("전체 톤: 이슈와 논점을 드러내는 이슈형으로 작성해 주세요.")
    else:
        parts.append("전체 톤: 독자의 공감과 감정을 살리는 감정형으로 작성해 주세요.")

    if options.length == "short":
        parts.append("문장은 짧고 핵심만 담아 주세요.")
    elif options.length == "explanatory":
        parts.append("설명을 보강해 이해하기 쉽게 작성해 주세요.")

    if options.speech_style == "report":
        parts.append("말투: 보도 기사체(~다/~했다)를 유지해 주세요.")
    elif options.speech_style == "cardnews":
        parts.append("말투: 카드뉴스에 맞게 읽기 쉬운 구어체로 작성해 주세요.")

    if options.keyword_emphasis:
        parts.append("핵심 키워드가 드러나도록 명확한 표현을 써 주세요.")

    return "\n\n[추가 지시]\n" + "\n".join(parts)


def build_generation_prompt(article: ArticleRecord, options: GenerationOptions | None = None) -> str:
    prompt = GENERATION_PROMPT.format(
        title=article.title,
        body=article.body_text[:AI_ARTICLE_BODY_MAX_LENGTH],
    )
    return prompt + build_options_suffix(options)


def build_keyword_prompt(article: ArticleRecord) -> str:
    return KEYWORD_PROMPT.format(
        title=article.title,
        body=article.body_text[:AI_KEYWORD_BODY_MAX_LENGTH],
    )


__all__ = [
    "GENERATION_PROMPT",
    "KEYWORD_PROMPT",
    "KEYWORD_SYSTEM_PROMPT",
    "SYSTEM_PROMPT",
    "build_generation_prompt",
    "build_keyword_prompt",
    "build_options_suffix",
]
