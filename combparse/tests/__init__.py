"""
Tests of combparse.
"""
from unittest import TestCase, main
