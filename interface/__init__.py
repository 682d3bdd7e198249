"""
Interface package: communication with opponents outside the engine.

Modules:
    cli - Line-oriented play loop. Reads opponent moves in notation from
          stdin, writes engine moves to stdout. Run with: python -m interface.cli
"""
