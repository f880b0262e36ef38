"""OEE metrics engine.

Estructura:
- common/   → Settings cargados desde entorno / .env
- points/   → Modelo de puntos del host (valores, store, nombres)
- engine/   → Cálculo OEE, turnos, planificación, tendencias, escritura
- counter/  → Contador de pulsos y runtime (productor upstream)
- api/      → Endpoints FastAPI de salud y diagnóstico
"""

__version__ = "0.4.0"
