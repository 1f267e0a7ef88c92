#!/usr/bin/env python3
"""Firm rule data and threshold configuration validation script."""

import sys
from pathlib import Path
from typing import List

import yaml

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from propfirm_app.config.loader import ConfigLoader
from propfirm_app.config.validation import ConfigValidator, ValidationError
from propfirm_app.logging.config import configure_logging
from propfirm_app.rules.repository import DEFAULT_RULES_DIR, list_supported_firms


def validate_firm_file(slug: str) -> List[ValidationError]:
    """Validate the shipped rule document for one firm."""
    path = DEFAULT_RULES_DIR / f"{slug}.yaml"
    with open(path) as f:
        document = yaml.safe_load(f)
    return ConfigValidator.validate_firm_document(document)


def main():
    """Main validation function."""
    print("🔍 Validating firm rule data...")

    loader = ConfigLoader.create()
    all_valid = True

    settings = loader.merge_config()
    if not ConfigValidator.validate_config(settings):
        logging_params = loader.build_config(settings).logging
        configure_logging(level=logging_params.level, format_json=logging_params.format_json)

    for slug in list_supported_firms():
        print(f"\n📊 Validating {slug}...")

        try:
            errors = validate_firm_file(slug)
            errors.extend(ConfigValidator.validate_config(loader.merge_config(slug)))

            if errors:
                print(f"❌ Found {len(errors)} validation errors:")
                for error in errors:
                    print(f"  • {error.field}: {error.message} (value: {error.value})")
                all_valid = False
            else:
                print(f"✅ {slug} rules are valid")

        except (OSError, yaml.YAMLError) as e:
            print(f"❌ Error reading {slug}: {e}")
            all_valid = False

    if all_valid:
        print(f"\n🎉 All firm rule validation passed!")
        sys.exit(0)
    else:
        print(f"\n❌ Firm rule validation failed!")
        sys.exit(1)


if __name__ == "__main__":
    main()
