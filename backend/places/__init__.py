"""
Places provider layer.

Responsibilities:
- Manage Google Maps API configuration and credentials.
- Search nearby restaurants, compute travel durations, geocode addresses.
- Drop places that are not real sit-down restaurants (chains, shops, bars).
- Surface every transport or quota failure as a ``ProviderError``.
"""
