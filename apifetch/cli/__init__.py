"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Apifetch, a product of Garudex Labs

Command-line interface for Apifetch.
"""
