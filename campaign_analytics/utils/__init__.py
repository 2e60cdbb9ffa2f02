"""Shared utilities"""
