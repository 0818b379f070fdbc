"""Qt-side helpers for gitlanes"""
