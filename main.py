#!/usr/bin/env python3
# ABOUTME: Main entry point for checking an end-to-end runner config
# ABOUTME: Loads the config file, reports problems and prints a summary

import logging
import sys

from codecept_config import ConfigError, get_config


def main(argv=None) -> int:
    """Main entry point."""
    args = sys.argv[1:] if argv is None else argv
    config_path = args[0] if args else "codecept.conf.yaml"

    logging.basicConfig(level=logging.INFO)

    try:
        config = get_config(config_path)
    except ConfigError as e:
        print(f"❌ Invalid config {config_path}")
        print(f"   {e}")
        return 1

    print(f"✅ {config.name}")
    print(f"📁 Output: {config.output_dir}")
    print(f"🧩 Helpers: {', '.join(config.helpers) or '(none)'}")
    print(f"🔌 Plugins enabled: {', '.join(config.enabled_plugins()) or '(none)'}")
    if config.gherkin is not None:
        print(f"🥒 Feature files: {len(config.feature_files())}")
    if config.tests:
        print(f"🧪 Test files: {len(config.test_files())}")
    print(f"⏱️ Step timeout: {config.step_timeout or 'disabled'}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
