import json
import os
import sys

from src.exporters import generate_pick_list_csv, generate_pick_list_markdown, pick_list_rows
from src.xarm_lib import Session, XarmError, create_empty_session


def load_job_files(folder="data"):
    """
    Reads every *.json job file in `folder`.

    Each file holds a list of components:
        [{"kind": "crossarm", "selections": {...}, "pole_width_mm": 150}, ...]
    """
    jobs = []

    if not os.path.exists(folder):
        print(f"❌ Missing folder: '{folder}'. Create it and drop your job files there.")
        sys.exit(1)

    files = sorted(f for f in os.listdir(folder) if f.endswith(".json"))

    if not files:
        print(f"⚠️  No .json files in '{folder}'.")
        sys.exit(1)

    print(f"📂 Reading {len(files)} files from '{folder}'...")

    for filename in files:
        path = os.path.join(folder, filename)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if isinstance(data, dict):
                data = [data]
            jobs.extend((filename, entry) for entry in data)
            print(f"   ok: {filename}")
        except (OSError, ValueError) as e:
            print(f"   fail: {filename} ({e})")

    return jobs


def build_session(jobs) -> tuple[Session, list[str]]:
    """Finalizes every job into one session. Invalid jobs are skipped and reported."""
    session = create_empty_session()
    errors = []

    for filename, entry in jobs:
        try:
            session.finalize(
                entry.get("kind", "crossarm"),
                entry.get("selections", {}),
                entry.get("pole_width_mm"),
            )
        except (XarmError, AttributeError) as e:
            errors.append(f"{filename}: {e}")

    return session, errors


if __name__ == "__main__":
    # 1. Ingest
    jobs = load_job_files("data")
    session, errors = build_session(jobs)

    # 2. Verify
    print("\n--- Components ---")
    for component in session:
        print(f"   {component.label}: {component.build_identifier}")

    if errors:
        print(f"\n⚠️  Skipped {len(errors)} invalid components:")
        for line in errors:
            print(f"   ? {line}")
    else:
        print("✅ All components valid.")

    if not len(session):
        print("\nNothing to pick.")
        sys.exit(1)

    # 3. Build List
    try:
        items = session.aggregate()
    except XarmError as e:
        print(f"\n❌ Error: {e}")
        sys.exit(1)

    rows = pick_list_rows(items)
    print(f"\nUnique parts: {len(rows)} | Total pieces: {sum(r['Qty'] for r in rows)}")

    # 4. Output
    out_dir = "output"
    os.makedirs(out_dir, exist_ok=True)

    csv_path = os.path.join(out_dir, "pick_list.csv")
    md_path = os.path.join(out_dir, "checklist.md")

    # Save CSV
    try:
        with open(csv_path, "wb") as f:
            f.write(generate_pick_list_csv(rows))
        print(f"\n✅ CSV: {csv_path}")
    except PermissionError:
        print(f"\n❌ Error: Close {csv_path} first.")

    # Save Markdown
    try:
        with open(md_path, "w", encoding="utf-8") as f:
            f.write(generate_pick_list_markdown(rows, session))
        print(f"✅ MD:  {md_path}")
    except PermissionError:
        print(f"\n❌ Error: Close {md_path} first.")

    print("\nDone.")
