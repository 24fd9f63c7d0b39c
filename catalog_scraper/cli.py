from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .batch import BatchOrchestrator
from .config import (
    CACHE_DIR,
    DEFAULT_MAX_ID,
    DEFAULT_MIN_ID,
    DEFAULT_OUTPUT_NAME,
    DEFAULT_URL,
    MAX_RETRIES,
    OUTPUT_DIR,
    REQUEST_DELAY,
    ScraperConfig,
)
from .errors import ScraperError
from .log import setup_logging
from .types import ProductRecord


MESSAGES = {
    "hr": {
        "cached_on": "Cached je postavljen.",
        "cached_off": "Cached nije postavljen.",
        "single": "Obrađuje se samo proizvod s id: {id}",
        "range": "Obrađuju se proizvodi od {min} do {max}",
        "progress_ok": "[{current}/{total}] Proizvod {id}: {name}",
        "progress_fail": "[{current}/{total}] Proizvod {id} preskočen: {error}",
        "success": "Gotovo. Spremljeno proizvoda: {count}, preskočeno: {skipped}",
        "file": "Datoteka: {path}",
        "error": "Greška: {error}",
        "interrupted": "Prekinuto od strane korisnika",
        "help_desc": "Dohvaća stranice proizvoda po id-u i sprema podatke u JSON.",
        "help_url": "URL format bez id dijela, npr. '{url}'",
        "help_min": "Početni proizvod od kojeg kreće scrapanje",
        "help_max": "Zadnji proizvod",
        "help_single": "Ako je potrebno izvršiti program za samo jedan proizvod, npr 1200",
        "help_cached": "Program će iz cachea na disku probati parsati podatke, inače ponovo skida",
        "help_out": "Ime datoteke u koju se sprema rezultat",
        "help_cache_dir": "Direktorij cachea",
        "help_out_dir": "Direktorij za rezultat",
        "help_delay": "Pauza nakon svakog dohvaćanja (sek)",
        "help_ua": "Zamijeni User-Agent",
        "help_retries": "Broj ponavljanja kod HTTP grešaka",
        "help_lang": "Jezik poruka: hr ili en (zadano hr)",
        "help_verbose": "Detaljniji ispis",
    },
    "en": {
        "cached_on": "Cache is enabled.",
        "cached_off": "Cache is disabled.",
        "single": "Processing single product with id: {id}",
        "range": "Processing products {min} to {max}",
        "progress_ok": "[{current}/{total}] Product {id}: {name}",
        "progress_fail": "[{current}/{total}] Product {id} skipped: {error}",
        "success": "Done. Saved products: {count}, skipped: {skipped}",
        "file": "File: {path}",
        "error": "Error: {error}",
        "interrupted": "Interrupted by user",
        "help_desc": "Fetch product pages by id and save the extracted data as JSON.",
        "help_url": "URL format without the id part, e.g. '{url}'",
        "help_min": "First product id to scrape",
        "help_max": "Last product id to scrape",
        "help_single": "Scrape only this product id, e.g. 1200",
        "help_cached": "Parse pages from the on-disk cache when present instead of downloading",
        "help_out": "Name of the output file",
        "help_cache_dir": "Cache directory",
        "help_out_dir": "Output directory",
        "help_delay": "Pause after every download (sec)",
        "help_ua": "Override User-Agent",
        "help_retries": "Retry count for HTTP errors",
        "help_lang": "Messages language: hr or en (default hr)",
        "help_verbose": "Verbose output",
    },
}


def _msg(lang: str, key: str, **kwargs) -> str:
    lang_key = lang if lang in MESSAGES else "hr"
    template = MESSAGES[lang_key].get(key, "")
    return template.format(**kwargs)


def _printer(lang: str):
    def report(identifier: int, current: int, total: int, record: Optional[ProductRecord], error) -> None:
        if record is not None:
            print(_msg(lang, "progress_ok", current=current, total=total, id=identifier, name=record.name), flush=True)
        else:
            print(_msg(lang, "progress_fail", current=current, total=total, id=identifier, error=error), flush=True)

    return report


def _build_arg_parser(lang: str = "hr") -> argparse.ArgumentParser:
    loc = MESSAGES.get(lang, MESSAGES["hr"])
    p = argparse.ArgumentParser(prog="catalog-scraper", description=loc["help_desc"])
    p.add_argument("--url", dest="url", default=DEFAULT_URL, help=loc["help_url"].format(url=DEFAULT_URL))
    p.add_argument("--min", dest="min_id", type=int, default=DEFAULT_MIN_ID, help=loc["help_min"])
    p.add_argument("--max", dest="max_id", type=int, default=DEFAULT_MAX_ID, help=loc["help_max"])
    p.add_argument("--single", dest="single_id", type=int, default=0, help=loc["help_single"])
    p.add_argument("--cached", dest="cached", action="store_true", help=loc["help_cached"])
    p.add_argument("-o", "--out", dest="output_name", default=DEFAULT_OUTPUT_NAME, help=loc["help_out"])
    p.add_argument("--cache-dir", dest="cache_dir", default=CACHE_DIR, help=loc["help_cache_dir"])
    p.add_argument("--out-dir", dest="output_dir", default=OUTPUT_DIR, help=loc["help_out_dir"])
    p.add_argument("-d", "--delay", dest="delay", type=float, default=REQUEST_DELAY, help=loc["help_delay"])
    p.add_argument("-H", "--user-agent", dest="user_agent", default=None, help=loc["help_ua"])
    p.add_argument("-r", "--retries", dest="retries", type=int, default=MAX_RETRIES, help=loc["help_retries"])
    p.add_argument("--lang", dest="lang", choices=["hr", "en"], default=lang, help=loc["help_lang"])
    p.add_argument("-v", "--verbose", dest="verbose", action="store_true", help=loc["help_verbose"])
    return p


def config_from_args(args: argparse.Namespace) -> ScraperConfig:
    return ScraperConfig(
        url_template=args.url,
        min_id=args.min_id,
        max_id=args.max_id,
        single_id=args.single_id or None,
        use_cache=args.cached,
        output_name=args.output_name,
        cache_dir=args.cache_dir,
        output_dir=args.output_dir,
        delay=args.delay,
        user_agent=args.user_agent,
        retries=args.retries,
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_arg_parser("hr")
    args = parser.parse_args(argv)
    lang = args.lang
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    try:
        config = config_from_args(args).validate()
        print(_msg(lang, "cached_on" if config.use_cache else "cached_off"), flush=True)
        if config.is_single:
            print(_msg(lang, "single", id=config.single_id), flush=True)
        else:
            print(_msg(lang, "range", min=config.min_id, max=config.max_id), flush=True)

        result = BatchOrchestrator(config, progress=_printer(lang)).run_and_write()
        print(_msg(lang, "success", count=len(result.records), skipped=len(result.failed)))
        print(_msg(lang, "file", path=config.output_path))
        return 0
    except KeyboardInterrupt:
        print(_msg(lang, "interrupted"), file=sys.stderr)
        return 130
    except ScraperError as exc:
        print(_msg(lang, "error", error=exc), file=sys.stderr)
        return 1
