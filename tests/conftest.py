pytest_plugins = ["renderscreenshot.testing.fixtures"]
