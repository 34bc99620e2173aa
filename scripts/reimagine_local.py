#!/usr/bin/env python3
"""
Local harness for the full reimagine flow (no HTTP).

Usage:
  python3 scripts/reimagine_local.py photo.jpg --careers CEO Astronaut --plan CEO --export out/

What it does:
- Uploads the photo through the same CareerSession the API uses
- Adds the given careers (or three random ones with --surprise) and generates portraits
- Optionally builds the plan for one career and writes the PDF / portraits to disk
"""

from __future__ import annotations

import argparse
import asyncio
import mimetypes
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from career_reimagined.application.use_cases.career_session import CareerSession
from career_reimagined.domain.entities.photo import UploadedPhoto
from career_reimagined.wiring.dependencies import build_session


def _print_notices(session: CareerSession) -> None:
    for notice in session.pop_notifications():
        print(f"! {notice}")


async def run(args: argparse.Namespace) -> int:
    session = build_session()
    path = Path(args.photo)
    mime_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"

    if not await session.select_photo(UploadedPhoto(data=path.read_bytes(), mime_type=mime_type, filename=path.name)):
        print(f"Upload rejected: {session.upload_error}")
        return 1
    print(f"Detected subject: {session.subject_descriptor}")

    if args.surprise:
        session.surprise_me()
    for career in args.careers or []:
        if not session.add_career(career):
            print(f"Skipped career: {career}")
    print(f"Careers: {', '.join(session.careers)}")

    images = await session.generate_images()
    out_dir = Path(args.export) if args.export else None
    if out_dir:
        out_dir.mkdir(parents=True, exist_ok=True)
    for img in images:
        status = f"error: {img.error}" if img.error else "ok"
        print(f"  - {img.career}: {status}")
        if out_dir and img.image_url:
            filename, data = session.download_image(img.career)
            (out_dir / filename).write_bytes(data)

    if not args.plan:
        return 0

    plan = await session.select_career(args.plan)
    _print_notices(session)
    if plan is None:
        return 1

    print(f"\n{plan.career}{' (satirical)' if plan.is_fictional else ''}")
    print(plan.intro)
    for week in plan.weeks:
        print(f"  Week {week.week_number}: {week.theme}")

    if out_dir:
        document = session.export_plan()
        _print_notices(session)
        if document is None:
            return 1
        (out_dir / document.filename).write_bytes(document.content)
        print(f"\nWrote {out_dir / document.filename} ({document.page_count} pages)")
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Reimagine a photo in new careers.")
    parser.add_argument("photo", help="JPEG, PNG or WEBP under 5MB")
    parser.add_argument("--careers", nargs="*", help="careers to explore (max 4)")
    parser.add_argument("--surprise", action="store_true", help="start from three random careers")
    parser.add_argument("--plan", help="career to build the 8-week plan for")
    parser.add_argument("--export", help="directory for portraits and the plan PDF")
    args = parser.parse_args()
    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
