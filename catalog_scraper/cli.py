from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Optional

from .config import settings
from .errors import BadRequest
from .fetch import make_fetcher
from .service import handle
from .types import CollectionResult


MESSAGES = {
    "ru": {
        "stage_scrape": "[1/2] Сбор товаров из коллекции: {url}",
        "stage_save": "[2/2] Сохранение в JSON…",
        "success": "Парсинг успешно завершён. Сохранено товаров: {count}",
        "file": "Файл: {path}",
        "bad_url": "Нужна полная ссылка на коллекцию (http:// или https://): {url}",
        "error": "Ошибка парсинга: {error}",
        "interrupted": "Прервано пользователем",
        "help_desc": (
            "Сбор всех товаров коллекции интернет-магазина с постраничной навигацией\n"
            "и сохранение результата в JSON."
        ),
        "help_url": "Полная ссылка на коллекцию, например https://shop.example.com/collections/all",
        "help_out": "Путь для сохранения JSON (по умолчанию products.json)",
        "help_timeout": "Таймаут одного запроса (сек)",
        "help_ua": "Переопределить User-Agent",
        "help_retries": "Количество повторов при ошибках HTTP",
        "help_verbose": "Подробный лог в stderr",
        "help_lang": "Язык сообщений: ru или en (по умолчанию ru)",
    },
    "en": {
        "stage_scrape": "[1/2] Collecting products from collection: {url}",
        "stage_save": "[2/2] Saving to JSON…",
        "success": "Parsing has been successfully completed. Saved products: {count}",
        "file": "File: {path}",
        "bad_url": "A full collection URL (http:// or https://) is required: {url}",
        "error": "Parsing error: {error}",
        "interrupted": "Interrupted by user",
        "help_desc": (
            "Collect every product of a shop collection across its pages\n"
            "and save the result as JSON."
        ),
        "help_url": "Full collection URL, e.g. https://shop.example.com/collections/all",
        "help_out": "Path to JSON output (default products.json)",
        "help_timeout": "Timeout of a single request (sec)",
        "help_ua": "Override User-Agent",
        "help_retries": "Retry count for HTTP errors",
        "help_verbose": "Verbose log to stderr",
        "help_lang": "Messages language: ru or en (default ru)",
    },
}


def _msg(lang: str, key: str, **kwargs) -> str:
    lang_key = lang if lang in MESSAGES else "ru"
    template = MESSAGES[lang_key].get(key, "")
    return template.format(**kwargs)


def write_result_json(result: CollectionResult, out_path: str) -> None:
    with open(out_path, "w", encoding="utf-8") as fh:
        json.dump(result.to_dict(), fh, indent=2, ensure_ascii=False)
        fh.write("\n")


def scrape_to_json(
    url: str,
    out_path: str,
    timeout: Optional[float] = None,
    user_agent: Optional[str] = None,
    retries: Optional[int] = None,
    lang: str = "ru",
) -> CollectionResult:
    """Scrape a collection and save the result where the browser download would put it."""
    fetch = make_fetcher(timeout_seconds=timeout, user_agent=user_agent, retries=retries)

    print(_msg(lang, "stage_scrape", url=url), flush=True)
    result = handle(url, fetch=fetch)

    print(_msg(lang, "stage_save"), flush=True)
    write_result_json(result, out_path)
    return result


def _build_arg_parser(lang: str = "ru") -> argparse.ArgumentParser:
    loc = MESSAGES.get(lang, MESSAGES["ru"])
    p = argparse.ArgumentParser(
        prog="catalog-scraper",
        description=loc["help_desc"],
    )
    p.add_argument("url", help=loc["help_url"])
    p.add_argument(
        "-o",
        "--out",
        dest="out_path",
        default="products.json",
        help=loc["help_out"],
    )
    p.add_argument(
        "-T",
        "--timeout",
        dest="timeout",
        type=float,
        default=settings.REQUEST_TIMEOUT,
        help=loc["help_timeout"],
    )
    p.add_argument(
        "-H",
        "--user-agent",
        dest="user_agent",
        default=None,
        help=loc["help_ua"],
    )
    p.add_argument(
        "-r",
        "--retries",
        dest="retries",
        type=int,
        default=settings.RETRIES,
        help=loc["help_retries"],
    )
    p.add_argument(
        "-v",
        "--verbose",
        dest="verbose",
        action="store_true",
        help=loc["help_verbose"],
    )
    p.add_argument(
        "--lang",
        dest="lang",
        choices=["ru", "en"],
        default=lang,
        help=loc["help_lang"],
    )
    return p


def main(argv: Optional[list[str]] = None) -> int:
    parser = _build_arg_parser("ru")
    args = parser.parse_args(argv)
    lang = args.lang
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    try:
        result = scrape_to_json(
            url=args.url,
            out_path=args.out_path,
            timeout=args.timeout,
            user_agent=args.user_agent,
            retries=args.retries,
            lang=lang,
        )
        print(_msg(lang, "success", count=len(result.products)))
        print(_msg(lang, "file", path=args.out_path))
        return 0
    except BadRequest:
        print(_msg(lang, "bad_url", url=args.url), file=sys.stderr)
        return 2
    except KeyboardInterrupt:
        print(_msg(lang, "interrupted"), file=sys.stderr)
        return 130
    except Exception as exc:
        print(_msg(lang, "error", error=exc), file=sys.stderr)
        return 1
