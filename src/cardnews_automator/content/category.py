"""Keyword-count category detection."""

from __future__ import annotations

from .models import ArticleRecord

CATEGORY_KEYWORDS: dict[str, tuple[str, ...]] = {
    "business": ("경제", "기업", "주식", "투자", "금융", "부동산", "시장", "증권", "원화", "예산", "매출", "이익"),
    "technology": ("기술", "AI", "인공지능", "스마트폰", "앱", "소프트웨어", "IT", "데이터", "클라우드", "5G", "반도체", "전자"),
    "politics": ("정치", "선거", "국회", "대통령", "법안", "의원", "정책", "의회", "위원", "여당", "야당", "국정"),
    "health": ("건강", "의학", "병원", "질병", "환자", "백신", "치료", "의사", "코로나", "감염", "보건"),
    "culture": ("문화", "영화", "음악", "예술", "공연", "전시", "드라마", "예능", "배우", "가수", "K팝", "축제"),
    "sports": ("스포츠", "야구", "축구", "농구", "올림픽", "선수", "경기", "우승", "월드컵", "프로", "리그", "감독"),
    "science": ("과학", "우주", "연구", "실험", "기후", "환경", "발견", "동물", "기술개발", "NASA"),
}

CATEGORY_LABELS: dict[str, str] = {
    "business": "경제/비즈니스",
    "technology": "IT/기술",
    "politics": "정치/시사",
    "health": "건강/의료",
    "culture": "문화/엔터",
    "sports": "스포츠",
    "science": "과학/환경",
    "default": "일반",
}


def detect_category(article: ArticleRecord | None) -> str:
    """Category with the most distinct keyword hits; ties keep the earlier one."""
    if article is None:
        return "default"
    text = f"{article.title} {article.body_text}".lower()

    best, best_count = "default", 0
    for category, keywords in CATEGORY_KEYWORDS.items():
        count = sum(1 for keyword in keywords if keyword.lower() in text)
        if count > best_count:
            best, best_count = category, count
    return best


def resolve_category(article: ArticleRecord) -> str:
    """The article's own category when it is a known key, else detection."""
    declared = article.category.strip().lower()
    if declared in CATEGORY_LABELS:
        return declared
    return detect_category(article)


def category_label(category: str) -> str:
    return CATEGORY_LABELS.get(category, CATEGORY_LABELS["default"])
