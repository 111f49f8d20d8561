"""
Script de serveur de développement.

Lance l'application FastAPI avec uvicorn sur l'hôte et le port de la configuration. Avec
`--memory`, les backends CEP et météo factices sont utilisés (aucun appel réseau).
"""

import argparse
import os


def main(argv: list[str] | None = None):
    """
    Point d'entrée principal du serveur.

    Les variables d'environnement de backend doivent être posées AVANT l'import de l'application.
    """
    parser = argparse.ArgumentParser(description="cep-weather dev server")
    parser.add_argument("--memory", action="store_true", help="backends CEP/météo en mémoire")
    parser.add_argument("--reload", action="store_true")
    args = parser.parse_args(argv)

    if args.memory:
        os.environ["POSTAL_BACKEND"] = "memory"
        os.environ["WEATHER_BACKEND"] = "memory"

    import uvicorn  # noqa: PLC0415

    from cep_weather.core.settings import get_settings  # noqa: PLC0415

    settings = get_settings()
    uvicorn.run(
        "cep_weather.app.main:app",
        host=settings.APP_HOST,
        port=settings.APP_PORT,
        reload=args.reload,
    )


if __name__ == "__main__":
    main()
