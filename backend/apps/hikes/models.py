from django.conf import settings
from django.db import models

from .constants import DEFAULT_DIFFICULTY, DIFFICULTIES


class HikePlan(models.Model):
    DIFFICULTY_CHOICES = [(level, level) for level in DIFFICULTIES]

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="hike_plans"
    )
    name = models.CharField(max_length=255)
    location = models.CharField(max_length=255, blank=True, default="")
    difficulty = models.CharField(
        max_length=16, choices=DIFFICULTY_CHOICES, default=DEFAULT_DIFFICULTY
    )
    notes = models.TextField(blank=True, default="")
    is_favorite = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.name} ({self.difficulty})"

    class Meta:
        db_table = "hike_plans"
        ordering = ["owner", "created_at", "id"]
        indexes = [
            models.Index(fields=["owner", "difficulty"], name="hike_owner_difficulty_idx"),
        ]
