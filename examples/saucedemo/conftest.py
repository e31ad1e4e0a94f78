pytest_plugins = ["pomwright.plugin"]
