#!/usr/bin/env python3
"""
Thought Wanderer

Uso:
    python run_wanderer.py [--server URL] [--spritesheet PATH] [--mute]

Ejemplo:
    python run_wanderer.py --server http://localhost:3000 --spritesheet "Spritesheet Walk.png"

Controles:
    Espacio   - Alternar modo autónomo / manual
    Flechas   - Mover personaje (modo manual)
    I         - Mostrar/ocultar info
    ESC       - Salir

Requisitos:
    pip install pygame pillow httpx pyttsx3
"""

from thought_wanderer.__main__ import main


if __name__ == "__main__":
    main()
