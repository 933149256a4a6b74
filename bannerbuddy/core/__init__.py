"""Cœur métier de Banner Buddy (résolution de configuration, thème, cycle de vie)."""
