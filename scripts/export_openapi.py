#!/usr/bin/env python3
"""Export the Travel Story OpenAPI schema to JSON and YAML files.

Usage:
    python scripts/export_openapi.py

Output:
    docs/api/openapi.json
    docs/api/openapi.yaml
"""

import json
import sys
from pathlib import Path

# Add src directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


def export_openapi() -> None:
    """Export OpenAPI schema to JSON and YAML files."""
    try:
        import yaml
    except ImportError:
        print("PyYAML not installed. Run: pip install -e '.[docs]'")
        sys.exit(1)

    # Import app after path setup
    from travelstory.api.main import create_app

    schema = create_app().openapi()

    docs_dir = Path(__file__).parent.parent / "docs" / "api"
    docs_dir.mkdir(parents=True, exist_ok=True)

    json_path = docs_dir / "openapi.json"
    with open(json_path, "w") as f:
        json.dump(schema, f, indent=2, ensure_ascii=False)
    print(f"Exported: {json_path}")

    yaml_path = docs_dir / "openapi.yaml"
    with open(yaml_path, "w") as f:
        yaml.dump(schema, f, default_flow_style=False, sort_keys=False, allow_unicode=True)
    print(f"Exported: {yaml_path}")

    paths = schema.get("paths", {})
    print("\nOpenAPI Schema Summary:")
    print(f"  Title: {schema.get('info', {}).get('title', 'unknown')}")
    print(f"  API Version: {schema.get('info', {}).get('version', 'unknown')}")
    print(f"  Endpoints: {len(paths)}")
    for path in sorted(paths):
        methods = ", ".join(m.upper() for m in paths[path])
        print(f"    {methods:<8} {path}")


if __name__ == "__main__":
    export_openapi()
