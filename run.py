#!/usr/bin/env python3
"""
Wrapper to run Gesture Drive from a source checkout
Puts src/ on the import path, then hands argv to main()
"""
import sys
import os

# Add src to path FIRST
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

if __name__ == "__main__":
    from main import main

    sys.exit(main(sys.argv[1:]))
