"""Intégration boucle d'événements (GLib) pour Banner Buddy."""
