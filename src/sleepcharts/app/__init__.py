"""NiceGUI application showing the sleep charts."""
