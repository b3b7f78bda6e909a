"""Server-rendered scene control panel.

- served by the Core FastAPI service
- plain HTML forms + redirects, no browser scripting
- panel logic lives in ``controller.PanelController`` and is driven by messages
"""
