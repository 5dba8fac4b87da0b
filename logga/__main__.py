"""
Allow running the logga tools as a module: python -m logga
"""
from logga.cli import main


if __name__ == '__main__':
    main()
