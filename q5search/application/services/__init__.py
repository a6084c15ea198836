"""
Application services.

Exports:
  - ChatService: Platform assistant
  - RecommendationService: Job recommendations
  - FeedService: Personalized feed
"""

from q5search.application.services.chat_service import ChatService
from q5search.application.services.feed_service import FeedService
from q5search.application.services.recommendation_service import RecommendationService

__all__ = ["ChatService", "FeedService", "RecommendationService"]
