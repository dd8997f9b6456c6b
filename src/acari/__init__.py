# SPDX-License-Identifier: MIT

from acari.cleanup import register_cleanup
from acari.terminal.app import run


def main() -> None:
    register_cleanup()
    run()


if __name__ == "__main__":
    main()
