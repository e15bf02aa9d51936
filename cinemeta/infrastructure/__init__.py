"""
Couche infrastructure de Cinemeta.

- persistence/ : Lecture du catalogue SQLite avec SQLModel (modeles et repository)

Le catalogue est alimente par la bibliotheque: ce package ne fait que lire
les films et les sources configurees.
"""
