"""
Games module - Campaign content.

Each campaign has its own subpackage with:
- Card definitions
- Enemy templates
- Stage map
- Catalog and campaign setup
"""
