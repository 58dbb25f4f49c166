# -*- coding: utf-8 -*-
"""Exporters de métricas del módulo de pagos."""
