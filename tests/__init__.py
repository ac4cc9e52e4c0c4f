"""Test suite package marker so ``tests.helpers`` resolves from every test module."""
