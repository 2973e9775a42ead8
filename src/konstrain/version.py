# src/konstrain/version.py
VERSION = "0.4.0"
