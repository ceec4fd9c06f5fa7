#!/usr/bin/env python3
from blogpipe.cli import main

if __name__ == "__main__":
    main()
