"""AIによるクイズ設問生成のユースケース."""

from uuid import uuid4

from src.application.dtos.quiz_dto import (
    GenerateQuizQuestionsInputDto,
    GenerateQuizQuestionsOutputDto,
)
from src.common.logging import get_logger
from src.domain.entities.quiz import Quiz
from src.domain.repositories.quiz_repository import QuizRepository
from src.domain.services.interfaces.llm_service import ILLMService


logger = get_logger(__name__)


class GenerateQuizQuestionsUseCase:
    """トピックから生成した設問をレベルのクイズに追加するユースケース.

    クイズがまだなければトピック名のDraftクイズを作成する。
    """

    def __init__(
        self, quiz_repository: QuizRepository, llm_service: ILLMService
    ) -> None:
        self.quiz_repository = quiz_repository
        self.llm_service = llm_service

    async def execute(
        self, input_dto: GenerateQuizQuestionsInputDto
    ) -> GenerateQuizQuestionsOutputDto:
        try:
            topic = input_dto.topic.strip()
            if not topic:
                return GenerateQuizQuestionsOutputDto(
                    success=False, error_message="Topic must not be blank"
                )
            if input_dto.count < 1:
                return GenerateQuizQuestionsOutputDto(
                    success=False, error_message="count must be at least 1"
                )

            quiz = await self.quiz_repository.get_by_level(input_dto.level_id)
            if quiz is not None and quiz.is_active:
                return GenerateQuizQuestionsOutputDto(
                    success=False,
                    error_message="Cannot add questions to an active quiz",
                )

            questions = await self.llm_service.generate_quiz(topic, input_dto.count)
            if not questions:
                return GenerateQuizQuestionsOutputDto(
                    success=False,
                    error_message="AI service returned no questions",
                )

            if quiz is None:
                quiz = Quiz(title=topic, id=f"quiz_{uuid4().hex[:8]}")
            quiz.add_questions(questions)
            await self.quiz_repository.save(input_dto.level_id, quiz)

            logger.info(
                "Quiz questions generated",
                level_id=input_dto.level_id,
                generated=len(questions),
            )
            return GenerateQuizQuestionsOutputDto(
                success=True,
                generated_count=len(questions),
                total_questions=len(quiz.questions),
            )
        except Exception as e:
            logger.error(f"Failed to generate quiz questions: {e}")
            return GenerateQuizQuestionsOutputDto(success=False, error_message=str(e))
