"""Plain-text views of articles and categories, using the site's Korean UI strings."""

from datetime import datetime
from typing import Any

SITE_TITLE = "Essential Times"
SITE_TAGLINE = "신뢰할 수 있는 뉴스와 정보를 제공합니다"
LATEST_NEWS = "최신 뉴스"
NO_ARTICLES = "등록된 기사가 없습니다."
NO_CATEGORY_ARTICLES = "이 카테고리에 등록된 기사가 없습니다."
NO_MY_ARTICLES = "작성한 기사가 없습니다."
MY_ARTICLES = "내 기사 목록"
ALL_ARTICLES = "전체 기사 목록"
CATEGORIES = "카테고리"
PREV_PAGE = "이전"
NEXT_PAGE = "다음"
EXCERPT_LENGTH = 150

MESSAGES = {
    "load_error": "기사를 불러오는 중 오류가 발생했습니다.",
    "not_found": "기사를 찾을 수 없습니다",
    "login_error": "로그인 중 오류가 발생했습니다.",
    "register_error": "회원가입 중 오류가 발생했습니다.",
    "register_ok": "회원가입이 완료되었습니다! 로그인해주세요.",
    "title_content_required": "제목과 내용을 모두 입력해주세요.",
    "save_error": "기사 저장 중 오류가 발생했습니다.",
    "delete_error": "기사 삭제 중 오류가 발생했습니다.",
    "session_expired": "세션이 만료되었습니다. 다시 로그인해주세요.",
    "logged_out": "로그아웃되었습니다.",
    "connection_error": "서버에 연결할 수 없습니다.",
}


def format_date(value: str | datetime | None) -> str:
    """Korean long date with 12-hour time, e.g. '2024년 3월 5일 오후 02:07'."""
    if not value:
        return ""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return value
    meridiem = "오전" if value.hour < 12 else "오후"
    hour = value.hour % 12 or 12
    return f"{value.year}년 {value.month}월 {value.day}일 {meridiem} {hour:02d}:{value.minute:02d}"


def truncate(text: str, max_length: int = EXCERPT_LENGTH) -> str:
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


def render_article_card(article: dict[str, Any]) -> str:
    meta = [article.get("author_name") or "", format_date(article.get("created_at"))]
    if article.get("category_name"):
        meta.append(article["category_name"])
    lines = [
        f"[{article['id']}] {article['title']}",
        f"    {truncate(article.get('content') or '')}",
        "    " + " | ".join(part for part in meta if part),
    ]
    if article.get("image_url"):
        lines.append(f"    {article['image_url']}")
    return "\n".join(lines)


def render_pagination(pagination: dict[str, Any]) -> str:
    parts = []
    if pagination.get("hasPrev"):
        parts.append(f"< {PREV_PAGE}")
    parts.append(f"{pagination.get('current', 1)} / {pagination.get('total', 0)}")
    if pagination.get("hasNext"):
        parts.append(f"{NEXT_PAGE} >")
    return "  ".join(parts)


def render_article_page(
    page: dict[str, Any],
    heading: str = LATEST_NEWS,
    empty_message: str = NO_ARTICLES,
) -> str:
    """Home / category view: heading, article cards, then the pager."""
    articles = page.get("articles") or []
    lines = [heading, "=" * len(heading)]
    if not articles:
        lines.append(empty_message)
        return "\n".join(lines)
    lines.extend(render_article_card(a) + "\n" for a in articles)
    lines.append(render_pagination(page.get("pagination") or {}))
    return "\n".join(lines)


def render_article_detail(article: dict[str, Any]) -> str:
    """Detail view; every newline in the content starts a new paragraph."""
    lines = [
        article["title"],
        "=" * len(article["title"]),
        f"기자: {article.get('author_name') or ''}  {format_date(article.get('created_at'))}",
    ]
    if article.get("category_name"):
        lines.append(f"{CATEGORIES}: {article['category_name']}")
    if article.get("image_url"):
        lines.append(article["image_url"])
    lines.append("")
    for paragraph in (article.get("content") or "").split("\n"):
        lines.append(paragraph)
        lines.append("")
    lines.append(f"#{SITE_TITLE} #뉴스")
    return "\n".join(lines)


def render_article_rows(articles: list[dict[str, Any]], heading: str = MY_ARTICLES) -> str:
    """Reporter/admin table: id, status, created date, title."""
    lines = [heading, "=" * len(heading)]
    if not articles:
        lines.append(NO_MY_ARTICLES)
        return "\n".join(lines)
    for a in articles:
        category = f" [{a['category_name']}]" if a.get("category_name") else ""
        lines.append(
            f"{a['id']:>5}  {a.get('status', '')}  작성일: {format_date(a.get('created_at'))}"
            f"  {a['title']}{category}"
        )
    return "\n".join(lines)


def render_categories(categories: list[dict[str, Any]]) -> str:
    lines = [CATEGORIES, "=" * len(CATEGORIES)]
    for c in categories:
        lines.append(f"{c['display_order']:>3}. {c['name']} ({c['slug']}) id={c['id']}")
    return "\n".join(lines)
