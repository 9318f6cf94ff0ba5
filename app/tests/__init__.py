"""Test suite for the MindCheck assessment engine."""
