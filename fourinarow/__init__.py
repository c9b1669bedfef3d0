"""
fourinarow - Four-in-a-Row game engine driven through a byte-stream protocol

This package provides the board, the win/draw detector, the command-driven
game engine, the text protocol (parser and renderer) and a device-style
front end that accepts command frames and serves responses by offset.
"""

# Version number
__version__ = '0.1.0'
