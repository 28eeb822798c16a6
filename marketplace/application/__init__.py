"""
Capa de Aplicación - casos de uso y puertos.

- interfaces/: Puertos (repositorios, pasarela de pago, reloj, generador de ids)
- use_cases/: Orquestación de cada operación expuesta por la API
- dtos/: Datos de contexto que viajan de la API a los casos de uso
"""
