"""Shared pieces: configuration, logging, broker, discovery and handler decorators."""