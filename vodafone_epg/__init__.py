"""Vodafone Portugal TV listings grabber producing XMLTV documents."""

__version__ = "0.1.0"
