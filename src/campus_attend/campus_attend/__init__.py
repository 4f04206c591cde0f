"""Campus attendance package.

This package is organized by feature modules (attendance, buffer, trend,
requests, ...) with a thin Flask controller layer over service/repository
layers. The buffer calculator and the trend fold are pure and share one
attendance classification rule.
"""
