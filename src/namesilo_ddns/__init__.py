"""
NameSilo DDNS - A dynamic DNS updater for NameSilo.

This package discovers the current public IP address and keeps a NameSilo
DNS record pointed at it, creating the record when it does not exist yet.
"""

__version__ = "0.1.0"
__author__ = "NameSilo DDNS Contributors"
