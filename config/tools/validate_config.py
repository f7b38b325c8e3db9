# tools/validate_config.py

import sys           # for exit codes
from pprint import pprint  # for structured printing

# make src discoverable if running as a script
from pathlib import Path
# __file__ is .../config/tools/validate_config.py
# parents[2] is the project root; append ROOT/src
PROJECT_ROOT = Path(__file__).resolve().parents[2]
sys.path.append(str(PROJECT_ROOT / "src"))

from env.loader import DEFAULT_CONFIG_PATH, load_dump_config  # import our loader


def main() -> None:
    """Load and print the resolved dump config, failing fast on errors."""
    path = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    try:
        config = load_dump_config(path)
    except (OSError, ValueError) as e:
        print("Config validation FAILED:", file=sys.stderr)
        print(repr(e), file=sys.stderr)
        sys.exit(1)                          # non-zero exit: CI will mark as failed

    print("Config validation OK.")
    print("\nSource:", path or DEFAULT_CONFIG_PATH)
    print("\nPlayer:", config.player or "(none)")
    print("Default group:", config.default_group_id)
    print(f"Offsets for '{config.offset_group}': y={config.y_offset} z={config.z_offset}")
    print("\nSystem groups:")
    pprint(sorted(config.system_groups))
    print("\nPalette:")
    for name, rgb in config.palette:
        print(f"  {name:<13} #{rgb:06X}")


if __name__ == "__main__":
    main()  # run main() only when script is executed directly
