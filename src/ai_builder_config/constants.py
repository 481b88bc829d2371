APP_NAME = "ai-builder"
PACKAGE_NAME = "ai_builder_config"
