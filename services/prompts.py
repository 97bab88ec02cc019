"""
Prompt templates for recipe analysis and recipe generation.

Both prompts ask for the same per-recipe JSON schema so that one normalizer
handles either reply.
"""

RECIPE_SCHEMA = """{
  "dishName": "Название блюда",
  "servings": число_порций,
  "totalWeight": общая_масса_готового_блюда_в_граммах,
  "difficulty": "Легко" или "Средне" или "Сложно",
  "cookingTime": "X минут" или "X часов Y минут",
  "ingredients": [
    "ингредиент 1 с точным количеством",
    "ингредиент 2 с точным количеством"
  ],
  "nutritionPer100g": {
    "calories": число_ккал_на_100г,
    "proteins": число_г_белков_на_100г,
    "fats": число_г_жиров_на_100г,
    "carbs": число_г_углеводов_на_100г
  },
  "nutritionPerServing": {
    "calories": число_ккал_на_порцию,
    "proteins": число_г_белков_на_порцию,
    "fats": число_г_жиров_на_порцию,
    "carbs": число_г_углеводов_на_порцию
  },
  "nutrition": {
    "calories": общее_количество_ккал_в_блюде,
    "proteins": общее_количество_г_белков,
    "fats": общее_количество_г_жиров,
    "carbs": общее_количество_г_углеводов
  },
  "instructions": [
    {
      "step": 1,
      "title": "Краткое название этапа (простыми словами)",
      "description": "Подробное, простое описание этого этапа. Объясняй как другу, но сохраняй точность."
    }
  ],
  "tags": ["тег1", "тег2", "тег3"]
}"""


def _schema(indent: str = "") -> str:
    return "\n".join(indent + line for line in RECIPE_SCHEMA.splitlines()).lstrip()


def build_analysis_prompt(recipe_text: str) -> str:
    """Single-turn instruction asking for a strict JSON analysis of recipe_text"""
    return f"""Ты - эксперт по кулинарии и диетологии с глубокими знаниями пищевой ценности продуктов и методов приготовления. Проанализируй следующий рецепт блюда и предоставь информацию в строго определенном JSON формате.

Текст рецепта:
{recipe_text}

ВАЖНЫЕ ТРЕБОВАНИЯ К АНАЛИЗУ:

1. НАЗВАНИЕ БЛЮДА: Определи точное название блюда на основе рецепта.

2. ИНГРЕДИЕНТЫ: Извлеки ВСЕ ингредиенты с ТОЧНЫМ указанием количества (в граммах, миллилитрах, штуках и т.д.). Если количество не указано, оцени его на основе стандартных порций.

3. РАСЧЕТ КБЖУ (КРИТИЧЕСКИ ВАЖНО):
   - Рассчитай КБЖУ для КАЖДОГО ингредиента с учетом точного количества и способа приготовления
   - Учитывай изменения при тепловой обработке (испарение воды, впитывание масла и т.д.)
   - Рассчитай ОБЩУЮ массу готового блюда
   - Рассчитай КБЖУ на 100 грамм готового блюда (раздели общие значения на общую массу и умножь на 100)
   - Рассчитай КБЖУ на одну порцию (раздели общие значения на количество порций)

4. СЛОЖНОСТЬ ПРИГОТОВЛЕНИЯ: оцени по шкале "Легко", "Средне", "Сложно".
   - "Легко" - простые блюда для начинающих (салаты, простые супы, бутерброды)
   - "Средне" - блюда средней сложности (жареные блюда, запеканки, пироги)
   - "Сложно" - сложные блюда, требующие опыта (многоэтапные блюда, выпечка, сложные соусы)

5. ВРЕМЯ ГОТОВКИ: общее время в формате "X минут" или "X часов Y минут", включая подготовку и ожидание.

6. ПОШАГОВАЯ ИНСТРУКЦИЯ:
   - Разбей процесс на МНОГО мелких шагов (минимум 8-12 шагов для сложных блюд)
   - Пиши ПРОСТЫМ, понятным языком, как будто объясняешь другу
   - Указывай точное время, температуру, степень готовности где это важно

7. ТЕГИ:
   - Создай 3-7 релевантных тегов: основной ингредиент, способ приготовления, тип блюда
   - Формат тегов: без символа #, только слова (например: ["свинина", "жарка", "второе"])

Верни ответ ТОЛЬКО в формате JSON без дополнительных комментариев:
{_schema()}"""


def build_generation_prompt(query: str) -> str:
    """Instruction asking for {"recipes": [...]} with 2-3 complete recipes matching query"""
    return f"""Ты - Вита, персональный помощник по рецептам. Пользователь запросил рецепты с учетом следующих требований:
{query}

ВАЖНО: Верни ТОЧНО 2-3 рецепта блюд, которые соответствуют запросу пользователя.

Для КАЖДОГО рецепта предоставь полную информацию:

1. НАЗВАНИЕ БЛЮДА: Точное название блюда
2. ИНГРЕДИЕНТЫ: Все ингредиенты с точным указанием количества
3. РАСЧЕТ КБЖУ: общая масса готового блюда, КБЖУ на 100 грамм, на одну порцию и на все блюдо с учетом тепловой обработки
4. СЛОЖНОСТЬ: "Легко", "Средне" или "Сложно"
5. ВРЕМЯ ГОТОВКИ: В формате "X минут" или "X часов Y минут"
6. ПОШАГОВАЯ ИНСТРУКЦИЯ: много мелких конкретных шагов (минимум 8-12 для сложных блюд), простым языком
7. ТЕГИ: 3-7 релевантных тегов (без символа #)

Верни ответ ТОЛЬКО в формате JSON без дополнительных комментариев:
{{
  "recipes": [
    {_schema("    ")}
  ]
}}"""
