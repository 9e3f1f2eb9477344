#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path
from typing import List, Optional

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from serene_app.breathing.catalog import ExerciseCatalog
from serene_app.config.loader import ConfigLoader
from serene_app.config.validation import ConfigValidator, ValidationError


def validate_directory(config_dir: Optional[Path] = None) -> List[ValidationError]:
    """Validate settings and exercises in a configuration directory."""
    loader = ConfigLoader.create(config_dir)
    errors = ConfigValidator.validate_config(loader.merge_config())
    errors.extend(ConfigValidator.validate_exercises(loader.load_exercises()))
    return errors


def main():
    """Main validation function."""
    config_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    loader = ConfigLoader.create(config_dir)

    print(f"🔍 Validating configuration in {loader.config_dir}...")

    errors = validate_directory(config_dir)

    if errors:
        print(f"❌ Found {len(errors)} validation errors:")
        for error in errors:
            print(f"  • {error.field}: {error.message} (value: {error.value})")
        sys.exit(1)

    catalog = ExerciseCatalog.from_config(loader.load_exercises())
    default_exercise = loader.merge_config()["breathing"]["default_exercise"]

    print(f"\n🌬️  Exercises:")
    for profile in catalog:
        phases = ", ".join(f"{p.value} {d}s" for p, d in profile.phase_durations.items() if d)
        print(f"  • {profile.id}: {profile.name or profile.id} ({phases}; {profile.cycle_seconds()}s per cycle)")

    if default_exercise not in catalog:
        print(f"\n❌ Default exercise '{default_exercise}' is not in the catalog")
        sys.exit(1)

    print(f"\n🎉 Configuration is valid!")
    sys.exit(0)


if __name__ == "__main__":
    main()
