# -*- coding: utf-8 -*-
"""
backend/app/__init__.py

Paquete principal 'app' del servicio WalletSync.

Autor: WalletSync
Fecha: 19/10/2026
"""

# Fin del archivo backend/app/__init__.py
