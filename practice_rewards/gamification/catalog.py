"""Default achievement catalog (kept in step with migrations/001_rewards_schema.sql)"""

from practice_rewards.models.rewards import AchievementDefinition

DEFAULT_CATALOG = [
    AchievementDefinition(id="streak-3", achievement_type="streak", required_value=3,
                          name="Warming Up", description="Practice 3 days in a row", icon="🔥"),
    AchievementDefinition(id="streak-7", achievement_type="streak", required_value=7,
                          name="Week Warrior", description="Practice 7 days in a row", icon="📅"),
    AchievementDefinition(id="streak-30", achievement_type="streak", required_value=30,
                          name="Unstoppable", description="Practice 30 days in a row", icon="🚀"),
    AchievementDefinition(id="xp-100", achievement_type="xp", required_value=100,
                          name="First Hundred", description="Earn 100 XP", icon="⭐"),
    AchievementDefinition(id="xp-500", achievement_type="xp", required_value=500,
                          name="Rising Star", description="Earn 500 XP", icon="🌟"),
    AchievementDefinition(id="xp-1000", achievement_type="xp", required_value=1000,
                          name="XP Master", description="Earn 1000 XP", icon="💫"),
    AchievementDefinition(id="solved-10", achievement_type="problems_solved", required_value=10,
                          name="Getting Started", description="Answer 10 problems", icon="✏️"),
    AchievementDefinition(id="solved-50", achievement_type="problems_solved", required_value=50,
                          name="Problem Solver", description="Answer 50 problems", icon="🧮"),
    AchievementDefinition(id="solved-100", achievement_type="problems_solved", required_value=100,
                          name="Century", description="Answer 100 problems", icon="💯"),
    AchievementDefinition(id="accuracy-80", achievement_type="accuracy", required_value=80,
                          name="Sharp Shooter", description="Reach 80% accuracy over at least 20 problems", icon="🎯"),
    AchievementDefinition(id="accuracy-90", achievement_type="accuracy", required_value=90,
                          name="Precision", description="Reach 90% accuracy over at least 20 problems", icon="🏹"),
]
