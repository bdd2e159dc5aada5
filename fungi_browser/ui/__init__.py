"""
Dash adapter layer: layout builders and callback registration.
"""
