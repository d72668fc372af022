# ============================================================================
# CORE MODULE
# ============================================================================
# STATUS: Core module initialization
# PURPOSE: Logging and configuration shared by the health service
# CREATED: 19 OCT 2026
# ============================================================================
