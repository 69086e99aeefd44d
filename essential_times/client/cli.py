"""
Command-line client. Examples:
  python -m essential_times.client login reporter@esil.com
  python -m essential_times.client articles --page 2
  python -m essential_times.client create --title "제목" --content-file body.txt --image photo.jpg
"""
import argparse
import getpass
import logging
import sys
from collections.abc import Callable

import httpx

from essential_times.client.api import ApiError, NewsApiClient, SessionExpiredError
from essential_times.client.render import (
    ALL_ARTICLES,
    MESSAGES,
    NO_CATEGORY_ARTICLES,
    render_article_detail,
    render_article_page,
    render_article_rows,
    render_categories,
)
from essential_times.client.session import SessionStore

logger = logging.getLogger(__name__)


class UsageError(Exception):
    """Input rejected before any request is sent."""


def _read_content(args: argparse.Namespace) -> str | None:
    if getattr(args, "content_file", None):
        with open(args.content_file, encoding="utf-8") as fh:
            return fh.read()
    return args.content


def cmd_login(client: NewsApiClient, args: argparse.Namespace) -> str:
    password = args.password or getpass.getpass("Password: ")
    user = client.login(args.email, password)
    return f"{user['name']} ({user['role']}) 로그인되었습니다."


def cmd_register(client: NewsApiClient, args: argparse.Namespace) -> str:
    password = args.password or getpass.getpass("Password: ")
    client.register(args.email, password, args.name)
    return MESSAGES["register_ok"]


def cmd_logout(client: NewsApiClient, args: argparse.Namespace) -> str:
    client.logout()
    return MESSAGES["logged_out"]


def cmd_whoami(client: NewsApiClient, args: argparse.Namespace) -> str:
    user = client.session.user
    if not user:
        return "로그인되어 있지 않습니다."
    return f"{user['name']} <{user['email']}> ({user['role']})"


def cmd_categories(client: NewsApiClient, args: argparse.Namespace) -> str:
    return render_categories(client.list_categories())


def cmd_articles(client: NewsApiClient, args: argparse.Namespace) -> str:
    if args.category:
        page = client.category_articles(args.category, args.page, args.limit)
        heading = next(
            (c["name"] for c in client.list_categories() if c["slug"] == args.category),
            args.category,
        )
        return render_article_page(page, heading=heading, empty_message=NO_CATEGORY_ARTICLES)
    return render_article_page(client.list_articles(args.page, args.limit))


def cmd_show(client: NewsApiClient, args: argparse.Namespace) -> str:
    return render_article_detail(client.get_article(args.id))


def cmd_mine(client: NewsApiClient, args: argparse.Namespace) -> str:
    return render_article_rows(client.my_articles())


def cmd_admin_articles(client: NewsApiClient, args: argparse.Namespace) -> str:
    return render_article_rows(client.admin_articles(), heading=ALL_ARTICLES)


def cmd_create(client: NewsApiClient, args: argparse.Namespace) -> str:
    content = _read_content(args)
    if not args.title or not content:
        raise UsageError(MESSAGES["title_content_required"])
    article = client.create_article(args.title, content, args.category_id, args.image)
    return f"기사가 작성되었습니다. (id={article['id']})"


def cmd_update(client: NewsApiClient, args: argparse.Namespace) -> str:
    category_id = "" if args.clear_category else args.category_id
    client.update_article(args.id, args.title, _read_content(args), category_id, args.image)
    return "기사가 수정되었습니다."


def cmd_delete(client: NewsApiClient, args: argparse.Namespace) -> str:
    client.delete_article(args.id)
    return "기사가 삭제되었습니다."


def cmd_category_create(client: NewsApiClient, args: argparse.Namespace) -> str:
    category = client.create_category(args.name, args.slug, args.order)
    return f"카테고리가 생성되었습니다. (id={category['id']})"


def cmd_category_update(client: NewsApiClient, args: argparse.Namespace) -> str:
    client.update_category(args.id, args.name, args.slug, args.order)
    return "카테고리가 수정되었습니다."


def cmd_category_delete(client: NewsApiClient, args: argparse.Namespace) -> str:
    client.delete_category(args.id)
    return "카테고리가 삭제되었습니다."


# Fallback message per command when the server gives no 'error' text.
FALLBACK_ERRORS = {
    "login": MESSAGES["login_error"],
    "register": MESSAGES["register_error"],
    "create": MESSAGES["save_error"],
    "update": MESSAGES["save_error"],
    "delete": MESSAGES["delete_error"],
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="essential-times", description="Essential Times client.")
    parser.add_argument("--api-url", help="Server base URL (default: $ESSENTIAL_TIMES_API_URL or http://localhost:5001)")
    parser.add_argument("--session-file", help="Where the login session is cached")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log HTTP activity")
    sub = parser.add_subparsers(dest="command", required=True)

    def add(name: str, handler: Callable, help_text: str) -> argparse.ArgumentParser:
        p = sub.add_parser(name, help=help_text)
        p.set_defaults(handler=handler)
        return p

    p = add("login", cmd_login, "Log in and cache the session")
    p.add_argument("email")
    p.add_argument("--password")

    p = add("register", cmd_register, "Create a reader account")
    p.add_argument("email")
    p.add_argument("name")
    p.add_argument("--password")

    add("logout", cmd_logout, "Forget the cached session")
    add("whoami", cmd_whoami, "Show the cached profile")
    add("categories", cmd_categories, "List categories")

    p = add("articles", cmd_articles, "List published articles")
    p.add_argument("--page", type=int, default=1)
    p.add_argument("--limit", type=int, default=10)
    p.add_argument("--category", help="Category slug")

    p = add("show", cmd_show, "Show one article")
    p.add_argument("id", type=int)

    add("mine", cmd_mine, "List your own articles")
    add("admin-articles", cmd_admin_articles, "List every article (admin)")

    for name, handler, help_text in (
        ("create", cmd_create, "Write a new article"),
        ("update", cmd_update, "Edit an article"),
    ):
        p = add(name, handler, help_text)
        if name == "update":
            p.add_argument("id", type=int)
            p.add_argument("--clear-category", action="store_true")
        p.add_argument("--title")
        group = p.add_mutually_exclusive_group()
        group.add_argument("--content")
        group.add_argument("--content-file")
        p.add_argument("--category-id", type=int)
        p.add_argument("--image", help="Path to an image file")

    p = add("delete", cmd_delete, "Delete an article")
    p.add_argument("id", type=int)

    for name, handler in (
        ("category-create", cmd_category_create),
        ("category-update", cmd_category_update),
    ):
        p = add(name, handler, "Manage categories (admin)")
        if name == "category-update":
            p.add_argument("id", type=int)
        p.add_argument("name")
        p.add_argument("slug")
        p.add_argument("--order", type=int, default=0)

    p = add("category-delete", cmd_category_delete, "Delete a category (admin)")
    p.add_argument("id", type=int)
    return parser


def main(argv: list[str] | None = None, client: NewsApiClient | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    own_client = client is None
    if client is None:
        client = NewsApiClient.connect(args.api_url, SessionStore(args.session_file))
    try:
        print(args.handler(client, args))
        return 0
    except UsageError as e:
        print(str(e), file=sys.stderr)
        return 2
    except SessionExpiredError as e:
        if args.command == "login":
            print(e.message, file=sys.stderr)
        else:
            print(MESSAGES["session_expired"], file=sys.stderr)
            print("  essential-times login <email>", file=sys.stderr)
        return 1
    except ApiError as e:
        logger.debug("API error %s on %s: %s", e.status_code, args.command, e.message)
        print(e.message or FALLBACK_ERRORS.get(args.command, MESSAGES["load_error"]), file=sys.stderr)
        return 1
    except httpx.HTTPError as e:
        logger.debug("HTTP failure on %s: %s", args.command, e)
        print(MESSAGES["connection_error"], file=sys.stderr)
        return 1
    except OSError as e:
        print(f"{e.filename}: {e.strerror}", file=sys.stderr)
        return 1
    finally:
        if own_client:
            client.close()


if __name__ == "__main__":
    sys.exit(main())
