"""CLI script to load departments from a JSON file into the backend DB.
Usage: python scripts/seed_departments.py departments.json

The file holds a list of objects with `id`, `name` and `location` keys.
"""
import sys
import json
import argparse
import pathlib
# Ensure `backend/` is on sys.path so `staff_api` package imports work when running this script directly
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
from sqlmodel import Session
from staff_api.database import engine, create_db_and_tables
from staff_api import services
from staff_api.exceptions import DuplicateResourceError, ValidationError
from staff_api.schemas import DepartmentIn


def main(path: pathlib.Path) -> int:
    """Create every department listed in `path`.

    Departments whose id already exists are skipped, invalid entries are
    reported. Results are printed to stdout for a quick CLI feedback loop.
    Returns the number of departments created.
    """
    items = json.loads(path.read_text(encoding='utf-8'))
    if not isinstance(items, list):
        print(f'{path} must contain a JSON list of departments')
        return 0
    create_db_and_tables()
    created = 0
    skipped = 0
    with Session(engine) as session:
        svc = services.DepartmentService(session)
        for idx, item in enumerate(items):
            try:
                dept = svc.add_department(DepartmentIn(**item))
            except DuplicateResourceError:
                skipped += 1
                continue
            except ValidationError as e:
                print(f'Entry {idx} rejected: {e.errors}')
                continue
            created += 1
            print(f'Created department {dept.id}: {dept.name}')
    print(f'Total created departments: {created}, skipped {skipped}')
    return created


if __name__ == '__main__':
    parser = argparse.ArgumentParser()
    parser.add_argument('path', type=pathlib.Path, help='JSON file with a list of departments')
    args = parser.parse_args()
    main(args.path)
