"""CLI entry point for the wellbeing log."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import shutil
import sys
from pathlib import Path

from dotenv import load_dotenv

from .charts import food_totals, money_totals, render_bars
from .config import AppConfig, load_config
from .entries import (
    edit_food_entry,
    new_food_entry,
    new_journal_entry,
    new_money_entry,
    snap_food,
)
from .models import audio_filename
from .recognition import RecognitionError, create_recognizer
from .store import DishCatalog, open_stores


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="optimumlog",
        description="Personal wellbeing log: journal, spending and food intake",
    )
    parser.add_argument(
        "--config", "-c", type=str, default=None, help="Path to a TOML config file"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )

    sub = parser.add_subparsers(dest="command")

    # journal
    journal = sub.add_parser("journal", help="Journal entries")
    jsub = journal.add_subparsers(dest="action")
    jadd = jsub.add_parser("add", help="Write a journal entry")
    src = jadd.add_mutually_exclusive_group(required=True)
    src.add_argument("--text", type=str, help="Entry text")
    src.add_argument("--audio", type=str, metavar="FILE", help="Recorded audio file")
    jsub.add_parser("list", help="Show journal entries")

    # money
    money = sub.add_parser("money", help="Spending tracker")
    msub = money.add_subparsers(dest="action")
    madd = msub.add_parser("add", help="Log a payment")
    madd.add_argument("amount", type=str)
    madd.add_argument("--method", type=str, default=None)
    madd.add_argument("--note", type=str, default="")
    msub.add_parser("list", help="Show payments")
    msub.add_parser("chart", help="Spending per day for the last week")

    # food
    food = sub.add_parser("food", help="Food log")
    fsub = food.add_subparsers(dest="action")
    fadd = fsub.add_parser("add", help="Log food manually")
    fadd.add_argument("name", type=str)
    fadd.add_argument("calories", type=str)
    fpick = fsub.add_parser("pick", help="Log a dish from the catalog")
    fpick.add_argument("name", type=str)
    fdishes = fsub.add_parser("dishes", help="Browse the dish catalog")
    fdishes.add_argument("--search", type=str, default="")
    fedit = fsub.add_parser("edit", help="Change a food entry")
    fedit.add_argument("id", type=str)
    fedit.add_argument("--name", type=str, default=None)
    fedit.add_argument("--calories", type=str, default=None)
    fremove = fsub.add_parser("remove", help="Delete a food entry")
    fremove.add_argument("id", type=str)
    fsub.add_parser("list", help="Show food entries")
    fsub.add_parser("chart", help="Calories per day for the last week")
    fsnap = fsub.add_parser("snap", help="Recognise a meal photo")
    fsnap.add_argument("--image", type=str, default=None, help="Use an existing photo")
    fsnap.add_argument("--json", action="store_true", help="Print the entry as JSON")

    sub.add_parser("cameras", help="List available cameras")
    sub.add_parser("profile", help="Show profile preferences")
    return parser


def _setup_logging(verbose: bool) -> None:
    if verbose:
        level = logging.DEBUG
    else:
        level = logging.getLevelName(os.environ.get("LOG_LEVEL", "WARNING").upper())
        if not isinstance(level, int):
            level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _fail(message: str) -> None:
    print(message, file=sys.stderr)
    sys.exit(1)


def main(argv: list[str] | None = None) -> None:
    load_dotenv()
    parser = _build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    config = load_config(args.config)

    match args.command:
        case "journal":
            _cmd_journal(config, args)
        case "money":
            _cmd_money(config, args)
        case "food":
            if args.action == "snap":
                asyncio.run(_cmd_food_snap(config, args))
            else:
                _cmd_food(config, args)
        case "cameras":
            _cmd_cameras()
        case "profile":
            _cmd_profile(config)


def _short(ts) -> str:
    return ts.astimezone().strftime("%Y-%m-%d %H:%M")


def _cmd_journal(config: AppConfig, args) -> None:
    journals, _, _ = open_stores(config.storage)

    match args.action:
        case "add":
            audio_name = None
            if args.audio:
                audio_name = _import_audio(config, Path(args.audio))
            try:
                entry = new_journal_entry(text=args.text, audio_file=audio_name)
            except ValueError as e:
                _fail(str(e))
            journals.add(entry)
            print(f"Saved journal entry (id={entry.id})")
        case "list":
            if not len(journals):
                print("No journal entries yet.")
                return
            for e in journals:
                body = e.text if e.text is not None else f"[audio] {e.audio_file}"
                print(f"{_short(e.timestamp)}  {body}")
        case _:
            _fail("Usage: optimumlog journal {add,list}")


def _import_audio(config: AppConfig, source: Path) -> str:
    if not source.is_file():
        _fail(f"Audio file not found: {source}")
    name = audio_filename()
    dest = config.storage.path_for(name)
    dest.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(source, dest)
    return name


def _cmd_money(config: AppConfig, args) -> None:
    _, money, _ = open_stores(config.storage)

    match args.action:
        case "add":
            method = args.method or config.money.default_method
            if method not in config.money.methods:
                _fail(f"Unknown payment method {method!r} (choose: {', '.join(config.money.methods)})")
            try:
                entry = new_money_entry(args.amount, method, args.note)
            except ValueError as e:
                _fail(str(e))
            money.add(entry)
            print(f"Logged {entry.amount:.2f} via {entry.method} (id={entry.id})")
        case "list":
            if not len(money):
                print("No payments yet.")
                return
            for e in money:
                note = f"  {e.note}" if e.note else ""
                print(f"{_short(e.timestamp)}  {e.amount:>10.2f}  {e.method}{note}")
        case "chart":
            series = money_totals(
                money.items,
                days=config.charts.window_days,
                zero_fill=config.charts.zero_fill,
            )
            print(render_bars(series))
        case _:
            _fail("Usage: optimumlog money {add,list,chart}")


def _cmd_food(config: AppConfig, args) -> None:
    _, _, food = open_stores(config.storage)

    match args.action:
        case "add":
            try:
                entry = new_food_entry(args.name, args.calories)
            except ValueError as e:
                _fail(str(e))
            food.add(entry)
            print(f"Logged {entry.food} ({entry.calories} kcal, id={entry.id})")
        case "pick":
            catalog = DishCatalog.load(config.storage.dishes_path or None)
            dish = catalog.find(args.name)
            if dish is None:
                _fail(f"No dish named {args.name!r} in the catalog")
            entry = dish.to_food_entry()
            food.add(entry)
            print(f"Logged {entry.food} ({entry.calories} kcal, id={entry.id})")
        case "dishes":
            catalog = DishCatalog.load(config.storage.dishes_path or None)
            for d in catalog.search(args.search):
                print(f"  {d.name:<30} {d.kcal:>5} kcal")
        case "edit":
            existing = food.get(args.id)
            if existing is None:
                _fail(f"No food entry with id={args.id}")
            try:
                updated = edit_food_entry(existing, args.name, args.calories)
            except ValueError as e:
                _fail(str(e))
            food.update(updated)
            print(f"Updated {updated.food} ({updated.calories} kcal)")
        case "remove":
            existing = food.get(args.id)
            if existing is None:
                _fail(f"No food entry with id={args.id}")
            food.remove(existing)
            print(f"Removed {existing.food}")
        case "list":
            if not len(food):
                print("No entries yet. Snap a photo or add manually!")
                return
            for e in food:
                print(f"{_short(e.timestamp)}  {e.food:<30} {e.calories:>5} kcal  {e.id}")
        case "chart":
            series = food_totals(
                food.items,
                days=config.charts.window_days,
                zero_fill=config.charts.zero_fill,
            )
            print(render_bars(series, " kcal"))
        case _:
            _fail("Usage: optimumlog food {add,pick,dishes,edit,remove,list,chart,snap}")


async def _cmd_food_snap(config: AppConfig, args) -> None:
    _, _, food = open_stores(config.storage)

    if args.image:
        image_path = args.image
    else:
        from .camera import MealCamera

        print("Taking photo...")
        try:
            camera = MealCamera(
                camera_index=config.camera.index,
                save_dir=config.camera.save_dir,
            )
            image_path = camera.take_photo().path
        except (RuntimeError, ImportError, OSError) as e:
            _fail(f"Camera error: {e}")

    try:
        recognizer = create_recognizer(config)
        print("Recognising meal...")
        entry = await snap_food(recognizer, food, image_path)
    except (RecognitionError, ValueError) as e:
        _fail(f"LogMeal error: {e}")

    if args.json:
        print(json.dumps(entry.to_dict(), ensure_ascii=False, indent=2))
    else:
        print(f"Logged {entry.food} ({entry.calories} kcal, id={entry.id})")


def _cmd_cameras() -> None:
    from .camera import MealCamera

    try:
        cameras = MealCamera.probe()
    except ImportError as e:
        _fail(str(e))
    if not cameras:
        print("No cameras found.")
        return
    print(f"Available cameras: {len(cameras)}")
    for idx in cameras:
        print(f"  camera {idx}")


def _cmd_profile(config: AppConfig) -> None:
    print(f"Hello, {config.profile.nickname}!")
    print(f"Wallpaper: {config.profile.wallpaper}")
