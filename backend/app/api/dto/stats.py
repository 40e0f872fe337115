# backend/app/api/dto/stats.py
# DTOs pour les statistiques globales de la plateforme

from pydantic import BaseModel, Field


class PlatformStatsOut(BaseModel):
    """Statistiques agrégées de la plateforme.

    Attributes:
        total_challenges (int): Nombre de challenges.
        total_tips (int): Nombre d’astuces.
        total_events (int): Nombre d’événements.
        total_users (int): Nombre d’utilisateurs.
        active_participants (int): Utilisateurs distincts ayant au moins un enrollment `Ongoing`.
        total_logged_quantity (float): Somme de toutes les valeurs des journaux de progression.
    """

    total_challenges: int = Field(0, ge=0, description="Nombre de challenges")
    total_tips: int = Field(0, ge=0, description="Nombre d’astuces")
    total_events: int = Field(0, ge=0, description="Nombre d’événements")
    total_users: int = Field(0, ge=0, description="Nombre d’utilisateurs")
    active_participants: int = Field(0, ge=0, description="Participants actifs distincts")
    total_logged_quantity: float = Field(0.0, description="Quantité totale journalisée")
