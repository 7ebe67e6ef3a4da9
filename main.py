from __future__ import annotations

import logging
from pathlib import Path


def main() -> None:
    """Entrypoint for running the game from the command line."""
    import sys

    cfg_path = Path(sys.argv[1]) if len(sys.argv) >= 2 else Path("config.json")

    from config_parsing import load_config

    level_name = str(load_config(cfg_path).get("log_level", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    from game import Game  # local import keeps module load side effects minimal

    Game(cfg_path).run()


if __name__ == "__main__":
    main()
