# SPDX-License-Identifier: MIT

from zenbullet.terminal.app import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
