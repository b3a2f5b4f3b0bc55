#!/usr/bin/env python3
"""
Offline face matching utility.
Embeds a photo file and ranks it against a gallery JSON file
(a list of {"id", "name", "photoUrl", "embedding"} records).
"""

import argparse
import base64
import json
import mimetypes
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from src.core.errors import FaceMatchError
from src.core.face_match_service import FaceMatchService


def photo_to_data_uri(path: Path) -> str:
    mime_type = mimetypes.guess_type(path.name)[0] or "image/jpeg"
    encoded = base64.b64encode(path.read_bytes()).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


def main():
    parser = argparse.ArgumentParser(description='Match a photo against a gallery of known faces')
    parser.add_argument('photo', type=Path, help='Photo of the person to find')
    parser.add_argument('gallery', type=Path, help='Gallery JSON file')
    parser.add_argument('--json', action='store_true',
                       help='Print matches as JSON')

    args = parser.parse_args()

    with open(args.gallery, 'r', encoding='utf-8') as f:
        known_faces = json.load(f)

    service = FaceMatchService.from_config()

    try:
        matches = service.find_matching_faces(photo_to_data_uri(args.photo), known_faces)
    except FaceMatchError as e:
        print(f"ERROR: {e}")
        sys.exit(1)

    if args.json:
        print(json.dumps({"matches": [m.to_dict() for m in matches]}, indent=2))
        return

    if not matches:
        print("No matches found")
        return

    for rank, match in enumerate(matches, start=1):
        print(f"{rank}. {match.name} ({match.id}) - {match.confidence_score:.1f}%")


if __name__ == "__main__":
    main()
